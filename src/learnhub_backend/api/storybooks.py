from typing import Annotated
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from learnhub_backend.database import get_db
from learnhub_backend.interface.base import MessageResponse
from learnhub_backend.interface.storybooks import StorybookCreate, StorybookGet
from learnhub_backend.permissions.auth import get_current_principal
from learnhub_backend.permissions.principal import Principal
from learnhub_backend.services.catalog import StorybookService

storybook_router = APIRouter()


@storybook_router.get("", response_model=list[StorybookGet])
def list_storybooks(
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return StorybookService(db).list_storybooks(principal)


@storybook_router.post("", response_model=StorybookGet, status_code=status.HTTP_201_CREATED)
def create_storybook(
    payload: StorybookCreate,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return StorybookService(db).create_storybook(principal, payload)


@storybook_router.delete("/{storybook_id}", response_model=MessageResponse)
def delete_storybook(
    storybook_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    StorybookService(db).delete_storybook(principal, storybook_id)
    return MessageResponse(message="Storybook removed")
