"""FastAPI dependencies resolving services built in `create_app`."""
from fastapi import Request

from files_manager.services.database import FileMetadataStore, UserService
from files_manager.services.files import FileService
from files_manager.adapters.cache import RedisCache
from database.mongo_adapter import MongoAdapter


def get_file_service(request: Request) -> FileService:
    return request.app.state.file_service


def get_cache(request: Request) -> RedisCache:
    return request.app.state.cache


def get_mongo_adapter(request: Request) -> MongoAdapter:
    return request.app.state.mongo


def get_user_service(request: Request) -> UserService:
    return UserService(request.app.state.mongo)


def get_metadata_store(request: Request) -> FileMetadataStore:
    return FileMetadataStore(request.app.state.mongo)
