"""Models for uploader app.

StoredFile - describes a file written to the storage directory. There is no
metadata table: the directory listing is the index, and a StoredFile only
lives for the request that created it.
"""
from dataclasses import dataclass

DEFAULT_MIMETYPE = 'application/octet-stream'


@dataclass(frozen=True)
class StoredFile:
    # on-disk name, "<unix millis>-<sanitized original name>"
    filename: str
    original_name: str
    size: int
    mimetype: str = DEFAULT_MIMETYPE
