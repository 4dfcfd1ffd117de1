####################################
# --- Request/response schemas --- #
####################################

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from database.mongo_adapter import to_object_id

ROOT_PARENT_ID = 0
DEFAULT_PAGE_SIZE = 20


class FileType(str, Enum):
    """Kinds of record a user can create"""
    FOLDER = 'folder'
    FILE = 'file'
    IMAGE = 'image'


VALID_FILE_TYPES = tuple(file_type.value for file_type in FileType)


@dataclass(frozen=True)
class ParentRef:
    """
    Where a record sits in the tree.

    ``value`` is the root sentinel ``0``, the ObjectId of a folder, or (only
    for listing requests with a malformed id) the integer the id parsed to.
    """
    value: Union[int, ObjectId] = ROOT_PARENT_ID

    @classmethod
    def root(cls) -> "ParentRef":
        return cls(ROOT_PARENT_ID)

    @classmethod
    def from_query(cls, raw: Optional[str]) -> "ParentRef":
        """Parse the `parentId` listing parameter, never failing."""
        if not raw:
            return cls.root()
        object_id = to_object_id(raw)
        if object_id is not None:
            return cls(object_id)
        try:
            return cls(int(raw))
        except ValueError:
            return cls.root()

    @property
    def is_root(self) -> bool:
        return not isinstance(self.value, ObjectId) and self.value == ROOT_PARENT_ID

    def to_document(self) -> Union[int, ObjectId]:
        """Value stored in and matched against the `parentId` field."""
        return self.value

    def to_external(self) -> Union[int, str]:
        """Root stays the integer sentinel; references become strings."""
        if self.is_root:
            return ROOT_PARENT_ID
        return str(self.value)


@dataclass(frozen=True)
class UploadPayload:
    """Upload request that passed validation."""
    name: str
    type: FileType
    parent: ParentRef
    is_public: bool
    data: Optional[str] = None

    @property
    def is_folder(self) -> bool:
        return self.type == FileType.FOLDER


class CamelModel(BaseModel):
    """Base for API schemas. Python stays snake_case, JSON is camelCase."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class FileResponse(CamelModel):
    """Response model for a single file or folder record."""
    id: str = Field(description="Identifier assigned by the document store")
    user_id: str = Field(description="Owner of the record")
    name: str
    type: FileType
    is_public: bool = False
    parent_id: Union[int, str] = Field(
        default=ROOT_PARENT_ID,
        description="0 for top-level records, otherwise the id of the parent folder",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "5f1e7cda04a394508232559d",
                "userId": "5f1e7cda04a394508232559c",
                "name": "a.txt",
                "type": "file",
                "isPublic": False,
                "parentId": 0,
            }
        }
    )

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "FileResponse":
        """Shape a stored document: `_id` becomes `id`, `localPath` is dropped."""
        parent_id = document.get('parentId', ROOT_PARENT_ID)
        return cls(
            id=str(document['_id']),
            user_id=str(document['userId']),
            name=document['name'],
            type=document['type'],
            is_public=bool(document.get('isPublic', False)),
            parent_id=ParentRef(parent_id).to_external(),
        )


class ErrorResponse(BaseModel):
    """Body of every error response."""
    error: str


class StatusResponse(BaseModel):
    """Response model for `GET /status`."""
    redis: bool
    db: bool


class StatsResponse(BaseModel):
    """Response model for `GET /stats`."""
    users: int
    files: int
