import logging
import sys
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pymongo.database import Database

import database
import messages
from config import Settings
from routes import RESOURCES, build_router, envelope, get_db

logger = logging.getLogger("bookstore")


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    setup_logging(settings.log_level)
    if not settings.mongo_uri:
        raise RuntimeError("MONGO_URI is not set")
    try:
        client = database.open_client(settings.mongo_uri)
    except Exception as e:
        logger.error("Error connecting to MongoDB: %s", e)
        raise
    app.state.mongo_client = client
    app.state.db = database.get_database(client, settings.database_name)
    logger.info("Server running at http://%s:%d", settings.host, settings.port)
    try:
        yield
    finally:
        client.close()
        app.state.db = None
        logger.info("MongoDB connection closed")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(title="Online Bookstore API", lifespan=lifespan)
    app.state.settings = settings
    app.state.messages = messages.catalog(settings.message_language)
    app.state.db = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.error("%s %s failed after %.1fms", request.method, request.url.path, duration_ms, exc_info=True)
            raise
        duration_ms = (time.perf_counter() - start) * 1000
        status = response.status_code
        if status >= 500:
            level = logging.ERROR
        elif status >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO
        logger.log(level, "%s %s %d %.1fms", request.method, request.url.path, status, duration_ms)
        return response

    @app.exception_handler(RequestValidationError)
    async def handle_invalid_body(request: Request, exc: RequestValidationError):
        # Bodies that are not JSON objects never reach the schema layer
        details = ", ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()
        )
        return envelope(400, messages.INVALID_BODY[settings.message_language], error=details)

    @app.get("/", response_class=PlainTextResponse)
    def read_root():
        return messages.WELCOME

    @app.get("/test")
    def test_database(db: Database = Depends(get_db)):
        return database.describe_database(db)

    for resource in RESOURCES:
        app.include_router(build_router(resource))

    return app


app = create_app()


def main() -> None:
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    if not settings.mongo_uri:
        logger.error("MONGO_URI is not set; refusing to start")
        sys.exit(1)

    import uvicorn
    # uvicorn exits non-zero by itself when the lifespan fails to connect
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
