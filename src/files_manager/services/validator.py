"""
Upload payload validation.

Checks run in a fixed order and the first failure wins:

1. ``name`` present            -> "Missing name"
2. ``type`` present            -> "Missing type"
3. ``type`` is a known type    -> "Missing type"
4. ``data`` present unless folder -> "Missing data"
5. ``parentId`` (when truthy) names an existing folder
   -> "Parent not found" / "Parent is not a folder"
"""

import logging
from typing import Any, Dict

from files_manager.errors import ValidationFailedError
from files_manager.schemas import FileType, ParentRef, UploadPayload, VALID_FILE_TYPES
from files_manager.services.database import FileMetadataStore

logger = logging.getLogger(__name__)


class PayloadValidator:
    """Validates and normalizes upload requests. Performs at most one read."""

    def __init__(self, files: FileMetadataStore):
        self.files = files

    def validate(self, body: Any) -> UploadPayload:
        if not isinstance(body, dict):
            body = {}

        name = body.get('name')
        file_type = body.get('type')
        parent_id = body.get('parentId')
        data = body.get('data')
        # Only a JSON true makes a record public
        is_public = body.get('isPublic') is True

        if not name or not isinstance(name, str):
            raise ValidationFailedError("Missing name")
        if not file_type:
            raise ValidationFailedError("Missing type")
        # Unknown types reuse the missing-type message for client compatibility
        if not isinstance(file_type, str) or file_type not in VALID_FILE_TYPES:
            raise ValidationFailedError("Missing type")
        if not data and file_type != FileType.FOLDER.value:
            raise ValidationFailedError("Missing data")

        parent = ParentRef.root()
        if parent_id:
            parent_record = self.files.find_by_id(parent_id)
            if not parent_record:
                raise ValidationFailedError("Parent not found")
            if parent_record.get('type') != FileType.FOLDER.value:
                raise ValidationFailedError("Parent is not a folder")
            parent = ParentRef(parent_record['_id'])

        return UploadPayload(
            name=name,
            type=FileType(file_type),
            parent=parent,
            is_public=is_public,
            data=data,
        )
