from typing import Annotated
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from learnhub_backend.database import get_db
from learnhub_backend.interface.users import TokenResponse, UserGet, UserLogin, UserRegister, UserUpdate
from learnhub_backend.permissions.auth import get_current_principal
from learnhub_backend.permissions.principal import Principal
from learnhub_backend.services.identity import IdentityService

auth_router = APIRouter()


@auth_router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(payload: UserRegister, db: Session = Depends(get_db)):
    return IdentityService(db).register(payload)


@auth_router.post("/login", response_model=TokenResponse)
def login(payload: UserLogin, db: Session = Depends(get_db)):
    return IdentityService(db).login(payload.email, payload.password)


@auth_router.get("/me", response_model=UserGet)
def get_me(
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return IdentityService(db).get_profile(principal)


@auth_router.put("/me", response_model=UserGet)
def update_me(
    payload: UserUpdate,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return IdentityService(db).update_profile(principal, payload)
