from typing import Any, List, Optional

from fastapi import (
    APIRouter,
    Body,
    Depends,
    Header,
    Path,
    Query,
    status
)

from files_manager.dependencies import get_file_service
from files_manager.schemas import ErrorResponse, FileResponse
from files_manager.services.files import FileService

router = APIRouter()

ERROR_RESPONSES = {
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


@router.post(
    "/files",
    response_model=FileResponse,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}, **ERROR_RESPONSES},
)
def post_upload(
    body: Any = Body(None, description="`{name, type, parentId?, isPublic?, data?}`; data is base64"),
    x_token: Optional[str] = Header(None),
    file_service: FileService = Depends(get_file_service),
) -> FileResponse:
    """
    Create a folder, or upload a file or image.

    Validation failures come back as 400 with the reason in `error`.
    """
    return file_service.upload(x_token, body)


@router.get(
    "/files/{file_id}",
    response_model=FileResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}, **ERROR_RESPONSES},
)
def get_show(
    file_id: str = Path(..., description="Identifier of the file or folder"),
    x_token: Optional[str] = Header(None),
    file_service: FileService = Depends(get_file_service),
) -> FileResponse:
    """Retrieve the metadata of one of the caller's records."""
    return file_service.get_show(x_token, file_id)


@router.get(
    "/files",
    response_model=List[FileResponse],
    responses=ERROR_RESPONSES,
)
def get_index(
    parent_id: Optional[str] = Query(None, alias="parentId", description="Folder to list; root when omitted"),
    page: Optional[str] = Query(None, description="0-based page index, 20 records per page"),
    x_token: Optional[str] = Header(None),
    file_service: FileService = Depends(get_file_service),
) -> List[FileResponse]:
    """List the caller's records directly under a folder, one page at a time."""
    return file_service.get_index(x_token, parent_id, page)
