from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .database import close_db, init_db
from .errors import make_exception_handlers
from .logging_config import configure_logging, get_logger, request_context
from .routes.answers import router as answers_router
from .routes.auth import router as auth_router
from .routes.notifications import router as notifications_router
from .routes.questions import router as questions_router
from .routes.tags import router as tags_router
from .routes.votes import router as votes_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(
        level=settings.log_level,
        json_format=settings.log_json,
        service_name=settings.app_name,
    )
    init_db()
    logger.info("application_started")
    yield
    logger.info("shutting_down")
    close_db()


app = FastAPI(title="QA Board API", version="1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in get_settings().cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for exc_class, handler in make_exception_handlers().items():
    app.add_exception_handler(exc_class, handler)


@app.middleware("http")
async def attach_correlation_id(request: Request, call_next):
    cid = request.headers.get("X-Correlation-ID") or str(uuid4())
    request.state.correlation_id = cid
    with request_context(cid, path=request.url.path, method=request.method):
        response = await call_next(request)
    response.headers["X-Correlation-ID"] = cid
    return response


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/healthz")
def healthz():
    return {"status": "ok"}


app.include_router(auth_router)
app.include_router(tags_router)
app.include_router(questions_router)
app.include_router(answers_router)
app.include_router(votes_router)
app.include_router(notifications_router)
