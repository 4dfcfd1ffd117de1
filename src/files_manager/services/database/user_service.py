"""
Read access to the `users` collection. Users are created elsewhere.
"""

import logging
from typing import Any, Dict, Optional

from pymongo.errors import PyMongoError

from database.mongo_adapter import MongoAdapter
from files_manager.errors import BackendUnavailableError

logger = logging.getLogger(__name__)

USERS_COLLECTION = 'users'


class UserService:
    """Service for looking up user records"""

    def __init__(self, adapter: MongoAdapter):
        self.adapter = adapter

    def is_alive(self) -> bool:
        return self.adapter.is_alive()

    def get_user(self, user_id: Optional[str]) -> Optional[Dict[str, Any]]:
        """Get a user by id; None for missing or malformed ids"""
        if not user_id:
            return None
        try:
            return self.adapter.get_document(USERS_COLLECTION, user_id)
        except PyMongoError as e:
            raise BackendUnavailableError() from e

    def count(self) -> int:
        try:
            return self.adapter.count_documents(USERS_COLLECTION)
        except PyMongoError as e:
            raise BackendUnavailableError() from e
