import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from learnhub_backend.api.auth import auth_router
from learnhub_backend.api.courses import course_router
from learnhub_backend.api.enrollments import enrollment_router
from learnhub_backend.api.exceptions import error_kind
from learnhub_backend.api.jobs import job_router
from learnhub_backend.api.lessons import lesson_router
from learnhub_backend.api.progress import progress_router
from learnhub_backend.api.quizzes import quiz_router
from learnhub_backend.api.storybooks import storybook_router
from learnhub_backend.database import get_db, get_engine
from learnhub_backend.model import Base
from learnhub_backend.services.identity import IdentityService
from learnhub_backend.settings import settings

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)


def init_admin_user(db):

    if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD:
        logger.info("No bootstrap admin configured")
        return

    IdentityService(db).ensure_admin("Admin", settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)


def startup_logic():

    Base.metadata.create_all(get_engine())

    with next(get_db()) as db:
        init_admin_user(db)


@asynccontextmanager
async def lifespan(app: FastAPI):

    if settings.DEBUG_MODE == "production":
        startup_logic()

    yield

app = FastAPI(lifespan=lifespan, title="LearnHub API")

origins = [
    "*"
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Total-Count"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    content = {"kind": error_kind(exc), "detail": exc.detail}

    reason = getattr(exc, "reason", None)
    if reason is not None:
        content["reason"] = reason

    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={"kind": "ValidationError", "detail": jsonable_encoder(exc.errors())},
    )


app.include_router(
    auth_router,
    prefix="/auth",
    tags=["auth"],
)

app.include_router(
    course_router,
    prefix="/courses",
    tags=["courses"],
)

app.include_router(
    lesson_router,
    prefix="/lessons",
    tags=["lessons"],
)

app.include_router(
    quiz_router,
    prefix="/quizzes",
    tags=["quizzes"],
)

app.include_router(
    enrollment_router,
    prefix="/enrollments",
    tags=["enrollments"],
)

app.include_router(
    progress_router,
    prefix="/progress",
    tags=["progress"],
)

app.include_router(
    job_router,
    prefix="/jobs",
    tags=["jobs"],
)

app.include_router(
    storybook_router,
    prefix="/storybooks",
    tags=["storybooks"],
)


@app.get("/", tags=["info"])
def root():
    return {"message": "LearnHub API is running"}
