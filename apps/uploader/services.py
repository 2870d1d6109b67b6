import base64
import binascii
import logging
import re
import time
from pathlib import Path
from typing import Callable, Optional, Protocol

from apps.uploader.models import DEFAULT_MIMETYPE, StoredFile
from utils.exceptions import DecodeError, PayloadTooLargeError, ValidationError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024
_CONTROL_CHARS = re.compile(r'[\x00-\x1f\x7f]')
_DATA_URI = re.compile(r'^data:[^;,]*;base64,', re.IGNORECASE)


class AsyncReadable(Protocol):
    async def read(self, size: int = -1) -> bytes:
        ...


def sanitize_filename(name: str) -> str:
    """Reduce a client supplied name to a single safe path component."""
    candidate = (name or '').replace('\\', '/').split('/')[-1]
    candidate = _CONTROL_CHARS.sub('', candidate).strip()
    if candidate in ('', '.', '..'):
        raise ValidationError('Invalid filename')
    return candidate


def storage_name(original_name: str, clock: Callable[[], float] = time.time) -> str:
    return f'{int(clock() * 1000)}-{sanitize_filename(original_name)}'


def decode_base64_data(data: str) -> bytes:
    """Decode plain base64 or a ``data:<mime>;base64,`` URI. Whitespace is ignored."""
    payload = _DATA_URI.sub('', data.strip(), count=1)
    payload = ''.join(payload.split())
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError() from e


class LocalStorage:
    def __init__(self, base_path: str, max_size: Optional[int] = None):
        self.base_path = Path(base_path)
        self.max_size = max_size

    def ensure_ready(self) -> None:
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _path(self, name: str) -> Path:
        return self.base_path / name

    def _check_size(self, size: int) -> None:
        if self.max_size is not None and size > self.max_size:
            raise PayloadTooLargeError()

    async def put(self, name: str, data: bytes) -> int:
        self._check_size(len(data))
        path = self._path(name)
        with open(path, 'wb') as f:
            f.write(data)
        return path.stat().st_size

    async def put_stream(self, name: str, stream: AsyncReadable, chunk_size: int = CHUNK_SIZE) -> int:
        path = self._path(name)
        written = 0
        try:
            with open(path, 'wb') as f:
                while chunk := await stream.read(chunk_size):
                    written += len(chunk)
                    self._check_size(written)
                    f.write(chunk)
        except PayloadTooLargeError:
            path.unlink(missing_ok=True)
            raise
        return path.stat().st_size

    async def get(self, name: str) -> Optional[bytes]:
        path = self.resolve(name)
        if path is None:
            return None
        with open(path, 'rb') as f:
            return f.read()

    def resolve(self, name: str) -> Optional[Path]:
        """Map a request path onto a regular file beneath the storage root."""
        root = self.base_path.resolve()
        try:
            path = (root / name).resolve()
        except (OSError, ValueError):
            # embedded NUL bytes, symlink loops
            return None
        if not path.is_relative_to(root) or path == root or not path.is_file():
            return None
        return path


async def save_upload(storage: LocalStorage, upload) -> StoredFile:
    """Store a multipart file part under a timestamped name."""
    filename = storage_name(upload.filename)
    size = await storage.put_stream(filename, upload)
    mimetype = upload.content_type or DEFAULT_MIMETYPE
    logger.info('Stored upload %s (%d bytes, %s)', filename, size, mimetype)
    return StoredFile(filename=filename, original_name=upload.filename, size=size, mimetype=mimetype)


async def save_base64(storage: LocalStorage, original_name: str, data_b64: str) -> StoredFile:
    filename = storage_name(original_name)
    data = decode_base64_data(data_b64)
    size = await storage.put(filename, data)
    logger.info('Stored base64 upload %s (%d bytes)', filename, size)
    return StoredFile(filename=filename, original_name=original_name, size=size)
