from fastapi import status
from libs.result import Error


class ClientError(Exception):
    """A business outcome the caller must act on (4xx)"""

    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)

    def to_body(self) -> dict:
        error = {"code": self.base_error.code, "message": self.base_error.message}
        # e.g. the current version of a VERSION_CONFLICT
        if self.base_error.details:
            error["details"] = self.base_error.details
        return {"error": error}


class ServerError(Exception):
    """Unexpected failure; the message is logged, never returned"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)

    def to_body(self) -> dict:
        return {"error": {"code": self.base_error.code, "message": "Internal server error"}}
