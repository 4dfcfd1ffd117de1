"""
MongoDB adapter for document-based operations.
Gives services collection-level CRUD without exposing pymongo details.
"""

import logging
from typing import Dict, Any, List, Optional, Union

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, MongoClient
from pymongo.errors import PyMongoError
from .schemas import DOCUMENT_VALIDATORS

logger = logging.getLogger(__name__)

DEFAULT_DB_NAME = 'files_manager'


def to_object_id(value: Union[str, ObjectId, None]) -> Optional[ObjectId]:
    """Coerce a value to an ObjectId, returning None when it is not one."""
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str):
        return None
    try:
        return ObjectId(value)
    except InvalidId:
        return None


class MongoAdapter:
    """MongoDB adapter for document-based database operations"""

    def __init__(
        self,
        connection_string: Optional[str] = None,
        db_name: Optional[str] = None,
        client: Optional[MongoClient] = None,
        timeout_ms: int = 5000,
    ):
        if not connection_string and client is None:
            raise ValueError("MongoDB connection string or client required")

        self.connection_string = connection_string
        self.client = client
        self.db = None
        self._connect(db_name, timeout_ms)

    def _connect(self, db_name: Optional[str], timeout_ms: int) -> None:
        """Establish MongoDB connection"""
        if self.client is None:
            # pymongo connects lazily, so an unreachable server surfaces on first use
            self.client = MongoClient(self.connection_string, serverSelectionTimeoutMS=timeout_ms)

        if not db_name and self.connection_string:
            # Fallback to extracting from URI path
            db_name = self.connection_string.rsplit('/', 1)[-1].split('?')[0]
        db_name = db_name or DEFAULT_DB_NAME

        self.db = self.client[db_name]
        logger.info(f"Using MongoDB database: {db_name}")

    def _validate_document(self, collection: str, document: Dict[str, Any]) -> None:
        """Validate document against schema"""
        if collection in DOCUMENT_VALIDATORS:
            try:
                DOCUMENT_VALIDATORS[collection](document)
            except Exception as e:
                logger.error(f"Document validation failed for {collection}: {e}")
                raise ValueError(f"Document validation failed: {e}")

    def is_alive(self) -> bool:
        """Check whether the server answers a ping"""
        try:
            self.client.admin.command('ping')
            return True
        except PyMongoError as e:
            logger.warning(f"MongoDB ping failed: {e}")
            return False

    def init_collections(self) -> None:
        """Create indexes used by listing queries"""
        try:
            self.db['files'].create_index([("userId", ASCENDING), ("parentId", ASCENDING)])
            logger.info("MongoDB collections and indexes initialized successfully")
        except PyMongoError as e:
            logger.error(f"Error initializing MongoDB collections: {e}")
            raise

    def create_document(self, collection: str, document: Dict[str, Any]) -> ObjectId:
        """Insert a document and return the id assigned by the server"""
        self._validate_document(collection, document)
        try:
            # insert_one writes _id into the dict it is given
            result = self.db[collection].insert_one(dict(document))
            logger.info(f"Created document in {collection} with ID: {result.inserted_id}")
            return result.inserted_id
        except PyMongoError as e:
            logger.error(f"Error creating document in {collection}: {e}")
            raise

    def get_document(self, collection: str, doc_id: Union[str, ObjectId]) -> Optional[Dict[str, Any]]:
        """Get a document by its _id; malformed ids match nothing"""
        object_id = to_object_id(doc_id)
        if object_id is None:
            return None
        try:
            return self.db[collection].find_one({"_id": object_id})
        except PyMongoError as e:
            logger.error(f"Error getting document from {collection}: {e}")
            raise

    def query_documents(self, collection: str, query: Dict[str, Any], limit: int = 100, offset: int = 0) -> List[Dict[str, Any]]:
        """Query documents with filters, in natural order"""
        try:
            # Exhausting the cursor releases it server-side
            return list(self.db[collection].find(query).skip(offset).limit(limit))
        except PyMongoError as e:
            logger.error(f"Error querying documents from {collection}: {e}")
            raise

    def count_documents(self, collection: str, query: Optional[Dict[str, Any]] = None) -> int:
        """Count documents matching query"""
        try:
            return self.db[collection].count_documents(query or {})
        except PyMongoError as e:
            logger.error(f"Error counting documents in {collection}: {e}")
            raise

    def close(self) -> None:
        """Close MongoDB connection"""
        if self.client:
            self.client.close()
            logger.info("MongoDB connection closed")
