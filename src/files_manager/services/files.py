"""
File service: upload, show and index operations.

Every operation authenticates first, then works against the metadata
store and, for uploads of files and images, the local content store.
"""

import logging
from typing import Any, Dict, List, Optional

from files_manager.adapters.storage import LocalContentStore, decode_content
from files_manager.errors import NotFoundError
from files_manager.schemas import DEFAULT_PAGE_SIZE, FileResponse, ParentRef
from files_manager.services.auth import AuthService
from files_manager.services.database import FileMetadataStore
from files_manager.services.validator import PayloadValidator
from files_manager.utils.decorators import log_execution_time

logger = logging.getLogger(__name__)


def parse_page(raw: Optional[str]) -> int:
    """Page index from a query string; anything non-numeric or negative is 0."""
    try:
        page = int(raw)
    except (TypeError, ValueError):
        return 0
    return max(page, 0)


class FileService:
    """Orchestrates authentication, validation and persistence."""

    def __init__(
        self,
        auth: AuthService,
        files: FileMetadataStore,
        content_store: LocalContentStore,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.auth = auth
        self.files = files
        self.content_store = content_store
        self.validator = PayloadValidator(files)
        self.page_size = page_size

    @log_execution_time
    def upload(self, token: Optional[str], body: Any) -> FileResponse:
        """Create a folder, or store file content and create its record."""
        user = self.auth.authenticate(token)
        payload = self.validator.validate(body)

        record: Dict[str, Any] = {
            'userId': user['_id'],
            'name': payload.name,
            'type': payload.type.value,
            'isPublic': payload.is_public,
            'parentId': payload.parent.to_document(),
        }

        if not payload.is_folder:
            content = decode_content(payload.data)
            self.content_store.ensure_root()
            record['localPath'] = self.content_store.save(content)

        try:
            record['_id'] = self.files.insert(record)
        except Exception:
            if 'localPath' in record:
                self.content_store.discard(record['localPath'])
            raise
        logger.info(f"User {user['_id']} created {payload.type.value} {record['_id']}")
        return FileResponse.from_document(record)

    @log_execution_time
    def get_show(self, token: Optional[str], file_id: str) -> FileResponse:
        """A single record owned by the caller."""
        user = self.auth.authenticate(token)

        document = self.files.find_by_id(file_id)
        if not document:
            raise NotFoundError()
        # Other users' records look exactly like missing ones
        if str(document.get('userId')) != str(user['_id']):
            raise NotFoundError()
        return FileResponse.from_document(document)

    @log_execution_time
    def get_index(self, token: Optional[str], parent_id: Optional[str] = None, page: Optional[str] = None) -> List[FileResponse]:
        """One page of the caller's records directly under `parent_id`."""
        user = self.auth.authenticate(token)

        parent = ParentRef.from_query(parent_id)
        page_index = parse_page(page)
        documents = self.files.query(
            user_id=user['_id'],
            parent=parent,
            skip=page_index * self.page_size,
            limit=self.page_size,
        )
        return [FileResponse.from_document(document) for document in documents]
