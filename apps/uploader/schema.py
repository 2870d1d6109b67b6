from pydantic import BaseModel
from typing import Dict, Optional


class Base64Upload(BaseModel):
    # both optional so a missing field is reported as "Missing data or filename"
    data: Optional[str] = None
    filename: Optional[str] = None


class UploadResponse(BaseModel):
    success: bool = True
    filename: str
    url: str
    size: int
    mimetype: str


class ErrorResponse(BaseModel):
    success: bool = False
    message: str


class HealthResponse(BaseModel):
    status: str = 'ok'


class ServiceInfo(BaseModel):
    service: str
    endpoints: Dict[str, str]
