from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    INVALID_INPUT = "INVALID_INPUT"
    DOCUMENT_UNREADABLE = "DOCUMENT_UNREADABLE"


class DocNavError(Exception):
    """Raised at the package edges for caller mistakes.

    Only option validation and CLI input loading raise this. The pipeline
    itself never does: malformed documents yield an empty outline and faulty
    listeners are logged, so navigation degrades instead of failing the view.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "suggestion": self.suggestion,
            }
        }
