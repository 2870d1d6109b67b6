import io

import pytest
from fastapi.testclient import TestClient

from config.settings import Settings
from main import create_app

MAX_UPLOAD_SIZE = 4096


class FakeUpload:
    """Stands in for a multipart UploadFile: an async ``read`` plus the part's headers."""

    def __init__(self, data: bytes, filename: str = 'a.txt', content_type: str | None = 'text/plain'):
        self._buffer = io.BytesIO(data)
        self.filename = filename
        self.content_type = content_type

    async def read(self, size: int = -1) -> bytes:
        return self._buffer.read(size)


@pytest.fixture
def make_upload():
    return FakeUpload


@pytest.fixture
def storage_dir(tmp_path):
    return tmp_path / 'uploads'


@pytest.fixture
def settings(storage_dir):
    # explicit values so a developer's .env cannot leak into the tests
    return Settings(
        LOCAL_STORAGE_PATH=str(storage_dir),
        PUBLIC_BASE_URL=None,
        MAX_UPLOAD_SIZE=MAX_UPLOAD_SIZE,
        CORS_ORIGINS=['*'],
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client
