from typing import Any, Dict, List, Optional


class BlogApiError(Exception):
    """Base error; carries the HTTP status and the client-safe message."""

    status_code = 500

    def __init__(self, message: str = "Something went wrong!", status_code: Optional[int] = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"success": False, "message": self.message}


class ValidationFailed(BlogApiError):
    status_code = 400

    def __init__(self, errors: List[Dict[str, Any]], message: str = "Validation failed"):
        super().__init__(message)
        self.errors = errors

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["errors"] = self.errors
        return body


class InvalidIdentifier(BlogApiError):
    status_code = 400

    def __init__(self, message: str = "Invalid blog ID"):
        super().__init__(message)


class NotFound(BlogApiError):
    status_code = 404

    def __init__(self, message: str = "Blog not found"):
        super().__init__(message)


class StorageFailure(BlogApiError):
    status_code = 500
