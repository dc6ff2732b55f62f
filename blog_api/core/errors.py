# blog_api/core/errors.py
"""
Typed failures raised by the services.

Every failure carries an ``error_code`` and the HTTP ``status_code`` the
application answers with. Routes never build error responses for these by
hand; the handler registered in ``create_app`` does it.
"""

class BlogError(Exception):
    """Base class of every failure surfaced to API clients."""
    error_code = "INTERNAL_SERVER_ERROR"
    status_code = 500
    default_message = "An unexpected error occurred."

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error_code": self.error_code, "message": self.message}


class InvalidInputError(BlogError):
    """Missing or malformed input."""
    error_code = "VALIDATION_ERROR"
    status_code = 400
    default_message = "Fill in all fields."


class DuplicateEmailError(BlogError):
    error_code = "DUPLICATE_EMAIL"
    status_code = 409
    default_message = "Email already exists."


class WeakPasswordError(BlogError):
    error_code = "WEAK_PASSWORD"
    status_code = 422
    default_message = "Password should be at least 6 characters."


class PasswordMismatchError(BlogError):
    error_code = "PASSWORD_MISMATCH"
    status_code = 422
    default_message = "Passwords do not match."


class InvalidCredentialsError(BlogError):
    error_code = "INVALID_CREDENTIALS"
    status_code = 422
    default_message = "Invalid credentials."


class NotFoundError(BlogError):
    error_code = "NOT_FOUND"
    status_code = 404
    default_message = "Resource not found."


class ForbiddenError(BlogError):
    """The caller does not own the resource."""
    error_code = "FORBIDDEN"
    status_code = 403
    default_message = "You are not allowed to modify this resource."


class PayloadTooLargeError(BlogError):
    error_code = "PAYLOAD_TOO_LARGE"
    status_code = 413
    default_message = "Uploaded file is too large."


class UpdateFailedError(BlogError):
    error_code = "UPDATE_FAILED"
    status_code = 422
    default_message = "Could not update the resource."


class StorageError(BlogError):
    """Reading, writing or deleting a blob failed."""
    error_code = "STORAGE_ERROR"
    status_code = 500
    default_message = "File storage operation failed."


class InternalError(BlogError):
    """The document store failed in an unexpected way."""
    error_code = "INTERNAL_SERVER_ERROR"
    status_code = 500
