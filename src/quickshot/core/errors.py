"""Error types raised by the capture and resize pipeline."""

from typing import Any, Dict, Optional


class QuickshotError(Exception):
    """Base error for the capture pipeline."""

    kind = "QuickshotError"

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.hint = hint

    def __str__(self) -> str:
        if self.hint and self.hint not in self.message:
            return f"{self.message}. {self.hint}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"error": str(self), "kind": self.kind}
        if self.hint:
            data["hint"] = self.hint
        return data


class PermissionDenied(QuickshotError):
    """Raised when the OS refuses screen capture, usually missing authorization."""

    kind = "PermissionDenied"


class CaptureUnavailable(QuickshotError):
    """Raised when displays or windows cannot be enumerated or captured."""

    kind = "CaptureUnavailable"


class ArtifactNotFound(QuickshotError):
    """Raised when an expected intermediate file is missing."""

    kind = "ArtifactNotFound"


class EncodeFailed(QuickshotError):
    """Raised when a codec or converter subprocess fails."""

    kind = "EncodeFailed"


class InvalidInput(QuickshotError):
    """Raised for malformed paths, targets or non-positive budgets."""

    kind = "InvalidInput"
