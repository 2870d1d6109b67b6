"""Errors raised by the uploader and translated into ``{success: false, message}`` responses."""


class ServiceError(Exception):
    status_code = 500
    default_message = 'Internal server error'

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    status_code = 400
    default_message = 'Invalid request'


class NotFoundError(ServiceError):
    status_code = 404
    default_message = 'File not found'


class PayloadTooLargeError(ServiceError):
    status_code = 413
    default_message = 'Payload too large'


class StorageError(ServiceError):
    status_code = 500
    default_message = 'Storage failure'


class DecodeError(StorageError):
    default_message = 'Invalid base64 data'
