from contextlib import asynccontextmanager
from textwrap import dedent
import logging
from typing import Optional

import pydantic
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute

from database.mongo_adapter import MongoAdapter
from files_manager.adapters.cache import RedisCache
from files_manager.adapters.storage import LocalContentStore
from files_manager.errors import (
    FilesManagerError,
    handle_broad_exceptions,
    handle_files_manager_errors,
    handle_pydantic_validation_errors,
    handle_request_validation_errors,
)
from files_manager.routers.files import router as files_router
from files_manager.routers.health import router as health_router
from files_manager.config.settings import Settings
from files_manager.services.auth import AuthService
from files_manager.services.database import FileMetadataStore, UserService
from files_manager.services.files import FileService

# Set up logging
logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    mongo: Optional[MongoAdapter] = None,
    cache: Optional[RedisCache] = None,
) -> FastAPI:
    """
    Create a FastAPI application.

    `mongo` and `cache` default to clients built from `settings`; pass
    instances to run against other backends.
    """
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level)

    mongo = mongo or MongoAdapter(
        settings.mongo_connection_string,
        db_name=settings.db_database,
        timeout_ms=settings.db_timeout_ms,
    )
    cache = cache or RedisCache(settings.redis_url, timeout_seconds=settings.redis_timeout_seconds)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        cache.close()
        mongo.close()

    app = FastAPI(
        title="Files Manager API",
        summary="Upload, list and inspect files and folders",
        version="v1",
        description=dedent(
            """\
        Authenticate every request with the `X-Token` header.

        | Endpoint | Notes |
        | --- | --- |
        | `POST /files` | `data` is the base64 encoded content, omitted for folders |
        | `GET /files` | `parentId` and 0-based `page`, 20 records per page |
        | `GET /files/{id}` | records of other users answer 404 |
        """
        ),
        generate_unique_id_function=custom_generate_unique_id,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.mongo = mongo
    app.state.cache = cache
    app.state.file_service = FileService(
        auth=AuthService(cache, UserService(mongo)),
        files=FileMetadataStore(mongo),
        content_store=LocalContentStore(settings.folder_path),
        page_size=settings.page_size,
    )
    logger.info(f"Content stored under {settings.folder_path}")

    app.include_router(files_router, tags=["files"])
    app.include_router(health_router, tags=["health"])

    app.add_exception_handler(
        exc_class_or_status_code=FilesManagerError,
        handler=handle_files_manager_errors,
    )
    app.add_exception_handler(
        exc_class_or_status_code=RequestValidationError,
        handler=handle_request_validation_errors,
    )
    app.add_exception_handler(
        exc_class_or_status_code=pydantic.ValidationError,
        handler=handle_pydantic_validation_errors,
    )
    app.middleware("http")(handle_broad_exceptions)

    return app


def custom_generate_unique_id(route: APIRoute):
    """
    Generate prettier `operationId`s in the OpenAPI schema.

    These become the function names in generated client SDKs.
    """
    return f"{route.tags[0]}-{route.name}"


if __name__ == "__main__":
    import uvicorn

    settings = Settings()
    app = create_app(settings)
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
