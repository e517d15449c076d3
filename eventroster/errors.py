"""Error taxonomy surfaced to callers.

Every error carries a stable ``code`` (the kind) and a human-readable
``message`` in ``detail``, so clients can branch on the kind without parsing
text. Services raise these directly; FastAPI renders them as HTTP errors.
"""
from fastapi import HTTPException, status


class MembershipError(HTTPException):
    kind = "internal"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(
            status_code=self.status_code,
            detail={"code": self.kind, "message": message},
        )
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


class Unauthenticated(MembershipError):
    kind = "unauthenticated"
    status_code = status.HTTP_401_UNAUTHORIZED


class InvalidArgument(MembershipError):
    kind = "invalid-argument"
    status_code = status.HTTP_400_BAD_REQUEST


class PermissionDenied(MembershipError):
    kind = "permission-denied"
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(MembershipError):
    kind = "not-found"
    status_code = status.HTTP_404_NOT_FOUND


class AlreadyExists(MembershipError):
    kind = "already-exists"
    status_code = status.HTTP_409_CONFLICT


class FailedPrecondition(MembershipError):
    kind = "failed-precondition"
    status_code = status.HTTP_409_CONFLICT


class Aborted(MembershipError):
    """Raised only when the transaction retry budget is exhausted."""

    kind = "aborted"
    status_code = status.HTTP_409_CONFLICT
