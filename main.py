from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from config.settings import settings
from database.db import init_db

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
# quiet HTTP library debug logs
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

# ✅ middlewares
from middlewares.timing import TimingMiddleware
from middlewares.error_handler import add_error_handlers

# ✅ routers
from routers import grades, students, subjects


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info(f"database ready: {settings.DATABASE_URL.split('@')[-1]}")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_TITLE,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )

    # ✅ CORS for the front-end
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ✅ latency header (X-Latency-Ms)
    app.add_middleware(TimingMiddleware)

    # ✅ JSON error format
    add_error_handlers(app)

    # ✅ /v1 routers
    app.include_router(students.router, prefix="/v1")
    app.include_router(subjects.router, prefix="/v1")
    app.include_router(grades.router,   prefix="/v1")

    # ✅ health check
    @app.get("/health")
    def health_check():
        return {"status": "ok", "message": "API is running"}

    @app.get("/")
    def root():
        return {"message": f"{settings.APP_TITLE} - {settings.APP_DESCRIPTION}"}

    return app


app = create_app()
