"""Exception types shared by the remote clients and the services"""
from typing import Any, Dict, Optional


class RemoteStoreError(Exception):
    """Error reported by the remote tabular store or object storage"""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[str] = None,
        hint: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details
        self.hint = hint
        self.status_code = status_code

    @classmethod
    def from_payload(cls, payload: Any, status_code: Optional[int] = None) -> "RemoteStoreError":
        """Build an error from a PostgREST-style JSON error body"""
        if isinstance(payload, dict):
            message = payload.get("message") or payload.get("error") or payload.get("msg")
            return cls(
                message=str(message or f"Request failed with status {status_code}"),
                code=payload.get("code"),
                details=payload.get("details"),
                hint=payload.get("hint"),
                status_code=status_code,
            )
        return cls(message=f"Request failed with status {status_code}", status_code=status_code)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "details": self.details,
            "hint": self.hint,
        }


class AuthError(Exception):
    """Error reported by the remote auth provider"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ServiceError(Exception):
    """Write-path failure surfaced to the caller with the remote message"""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
