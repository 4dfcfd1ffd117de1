from fastapi import APIRouter, Depends

from database.mongo_adapter import MongoAdapter
from files_manager.adapters.cache import RedisCache
from files_manager.dependencies import (
    get_cache,
    get_metadata_store,
    get_mongo_adapter,
    get_user_service,
)
from files_manager.schemas import StatsResponse, StatusResponse
from files_manager.services.database import FileMetadataStore, UserService

router = APIRouter()


@router.get("/status", response_model=StatusResponse)
def get_status(
    cache: RedisCache = Depends(get_cache),
    mongo: MongoAdapter = Depends(get_mongo_adapter),
):
    """
    Report whether Redis and MongoDB are reachable.

    Always 200; the body carries the state of each backend.
    """
    return StatusResponse(redis=cache.is_alive(), db=mongo.is_alive())


@router.get("/stats", response_model=StatsResponse)
def get_stats(
    users: UserService = Depends(get_user_service),
    files: FileMetadataStore = Depends(get_metadata_store),
):
    """Number of users and of file records."""
    return StatsResponse(users=users.count(), files=files.count())
