"""Structured API errors for the gateway routes."""


class ApiError(Exception):
    """An error rendered as {"success": false, "error": {...}}."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: str | None = None,
        reason: str | None = None,
        headers: dict[str, str] | None = None,
    ):
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details
        self.reason = reason
        self.headers = headers
        super().__init__(message)

    def to_dict(self) -> dict:
        error = {"code": self.code, "message": self.message}
        if self.reason is not None:
            error["reason"] = self.reason
        if self.details is not None:
            error["details"] = self.details
        return {"success": False, "error": error}
