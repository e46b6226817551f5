"""Domain errors raised by the service layer.

Endpoints translate these into HTTP responses; services never raise
``HTTPException`` directly.
"""

from __future__ import annotations


class FeedError(Exception):
    """Base class for all domain errors."""


class ValidationFailed(FeedError):
    """A required field is missing or a value is out of bounds."""


class NotFound(FeedError):
    """The referenced entity does not exist."""


class AuthenticationRequired(FeedError):
    """The operation needs an authenticated caller."""


class NotAuthorized(FeedError):
    """The caller is neither the owner of the resource nor an admin."""


class LikeConflict(FeedError):
    """A concurrent toggle already inserted the same (post, actor) like."""
