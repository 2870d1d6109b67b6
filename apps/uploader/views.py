import logging
from typing import Optional
from urllib.parse import quote

from fastapi import Request
from fastapi.responses import FileResponse
from starlette.datastructures import UploadFile

from apps.uploader.models import StoredFile
from apps.uploader.schema import Base64Upload, UploadResponse
from apps.uploader.services import LocalStorage, save_base64, save_upload
from utils.exceptions import NotFoundError, StorageError, ValidationError

logger = logging.getLogger(__name__)


def _storage_error(exc: OSError) -> StorageError:
    # the client sees the OS reason only, never the server-side path
    logger.error('Storage write failed: %s', exc)
    return StorageError(exc.strerror or None)


def _storage(request: Request) -> LocalStorage:
    return request.app.state.storage


def build_file_url(request: Request, filename: str) -> str:
    """Download link for a stored file: PUBLIC_BASE_URL if configured, else the request's own origin."""
    base = request.app.state.settings.PUBLIC_BASE_URL or str(request.base_url)
    return f"{base.rstrip('/')}/files/{quote(filename)}"


def _stored_response(request: Request, stored: StoredFile) -> dict:
    body = UploadResponse(
        filename=stored.filename,
        url=build_file_url(request, stored.filename),
        size=stored.size,
        mimetype=stored.mimetype,
    )
    return body.model_dump(exclude={'success'})


async def upload_file(request: Request):
    async with request.form() as form:
        # only the first file part is stored
        uploads = [item for item in form.getlist('file') if isinstance(item, UploadFile) and item.filename]
        if not uploads:
            raise ValidationError('No file uploaded')
        try:
            stored = await save_upload(_storage(request), uploads[0])
        except OSError as e:
            raise _storage_error(e) from e
    return _stored_response(request, stored)


async def upload_base64(request: Request, payload: Optional[Base64Upload] = None):
    if payload is None or not payload.data or not payload.filename:
        raise ValidationError('Missing data or filename')
    try:
        stored = await save_base64(_storage(request), payload.filename, payload.data)
    except OSError as e:
        raise _storage_error(e) from e
    return _stored_response(request, stored)


async def download_file(request: Request, filename: str):
    path = _storage(request).resolve(filename)
    if path is None:
        raise NotFoundError('File not found')
    return FileResponse(path)
