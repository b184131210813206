"""
Taskie Backend - Uploaded File Serving
========================================

What:  Serves stored images under /uploads/<purpose>/<filename>.
How:   FileService.resolve() maps the path into the storage root and rejects
       anything that escapes it; the file goes out as a FileResponse.
Who:   Browsers rendering avatars, task images and payment proofs. Public.
"""

from fastapi import APIRouter
from fastapi.responses import FileResponse

from taskie.schemas.common import ErrorResponse
from taskie.services.file_service import URL_PREFIX, file_service

router = APIRouter(tags=["Files"])


@router.get(
    URL_PREFIX + "/{file_path:path}",
    response_class=FileResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Download an uploaded image",
)
async def get_upload(file_path: str) -> FileResponse:
    return FileResponse(file_service.resolve(file_path))
