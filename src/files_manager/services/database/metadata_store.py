"""
File metadata service over the `files` collection.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from bson import ObjectId
from pymongo.errors import PyMongoError

from database.mongo_adapter import MongoAdapter
from files_manager.errors import BackendUnavailableError
from files_manager.schemas import ParentRef

logger = logging.getLogger(__name__)

FILES_COLLECTION = 'files'


class FileMetadataStore:
    """Persists and retrieves file metadata records"""

    def __init__(self, adapter: MongoAdapter):
        self.adapter = adapter

    def insert(self, record: Dict[str, Any]) -> ObjectId:
        """Store a normalized record and return its new id"""
        try:
            return self.adapter.create_document(FILES_COLLECTION, record)
        except PyMongoError as e:
            raise BackendUnavailableError() from e

    def find_by_id(self, file_id: Union[str, ObjectId]) -> Optional[Dict[str, Any]]:
        """Point lookup; unknown and malformed ids both return None"""
        try:
            return self.adapter.get_document(FILES_COLLECTION, file_id)
        except PyMongoError as e:
            raise BackendUnavailableError() from e

    def query(self, user_id: ObjectId, parent: ParentRef, skip: int, limit: int) -> List[Dict[str, Any]]:
        """Records owned by `user_id` directly under `parent`, windowed by skip/limit"""
        try:
            return self.adapter.query_documents(
                FILES_COLLECTION,
                {'userId': user_id, 'parentId': parent.to_document()},
                limit=limit,
                offset=skip,
            )
        except PyMongoError as e:
            raise BackendUnavailableError() from e

    def count(self) -> int:
        try:
            return self.adapter.count_documents(FILES_COLLECTION)
        except PyMongoError as e:
            raise BackendUnavailableError() from e
