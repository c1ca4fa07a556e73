"""Error taxonomy shared by services and the HTTP layer."""

from __future__ import annotations


class GRCError(Exception):
    """Base class for failures surfaced directly to the caller."""

    status_code = 400
    code = "grc_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AuthenticationRequired(GRCError):
    """No caller identity was supplied."""

    status_code = 401
    code = "authentication_required"

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message)


class AuthorizationDenied(GRCError):
    """The caller holds no membership for the organization."""

    status_code = 403
    code = "authorization_denied"

    def __init__(self, message: str = "Not authorized") -> None:
        super().__init__(message)


class NotFound(GRCError):
    """A referenced entity id does not resolve."""

    status_code = 404
    code = "not_found"


class InvalidState(GRCError):
    """The entity is not in a state that permits the operation."""

    status_code = 409
    code = "invalid_state"


class DuplicateRecord(GRCError):
    """A unique index already holds a record for the key."""

    status_code = 409
    code = "duplicate"
