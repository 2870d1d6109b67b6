import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apps.uploader.routers import router as uploader_router
from apps.uploader.schema import HealthResponse, ServiceInfo
from apps.uploader.services import LocalStorage
from config.logger import configure_logging
from config.middleware import RequestLimitMiddleware
from config.settings import Settings, get_settings
from utils.exception_handlers import register_exception_handlers

logger = logging.getLogger(__name__)

SERVICE_INFO = {
    'service': 'File Upload Service',
    'endpoints': {
        'upload': 'POST /upload',
        'download': 'GET /files/:filename',
        'health': 'GET /health',
    },
}


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    storage = LocalStorage(settings.LOCAL_STORAGE_PATH, max_size=settings.MAX_UPLOAD_SIZE)
    # the service cannot run without its storage directory, let OSError stop startup
    storage.ensure_ready()

    app = FastAPI(title=SERVICE_INFO['service'])
    app.state.settings = settings
    app.state.storage = storage

    app.add_middleware(RequestLimitMiddleware, max_size=settings.MAX_UPLOAD_SIZE)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=['*'],
        allow_headers=['*'],
    )
    app.include_router(uploader_router)

    @app.get('/health', response_model=HealthResponse)
    async def health():
        # liveness only, storage is not checked
        return {'status': 'ok'}

    @app.get('/', response_model=ServiceInfo)
    async def root():
        return SERVICE_INFO

    register_exception_handlers(app)
    logger.info('Storing uploads in %s', storage.base_path.resolve())
    return app


def run() -> None:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    logger.info('Server running on port %d', settings.PORT)
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == '__main__':
    run()
