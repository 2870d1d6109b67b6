
# uploader/routers.py
from fastapi import APIRouter
from apps.uploader.schema import ErrorResponse, UploadResponse
from utils.response_wrapper import response_wrapper
from .views import download_file, upload_base64, upload_file

router = APIRouter()

_upload_responses = {200: {'model': UploadResponse}, 400: {'model': ErrorResponse}, 500: {'model': ErrorResponse}}

router.post("/upload", responses=_upload_responses)(response_wrapper(upload_file))
router.post("/upload-base64", responses=_upload_responses)(response_wrapper(upload_base64))
router.api_route("/files/{filename:path}", methods=["GET", "HEAD"], responses={404: {'model': ErrorResponse}})(download_file)
