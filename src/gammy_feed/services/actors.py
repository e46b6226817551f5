"""Resolution of the caller into an actor identity for likes.

Authenticated callers are keyed by user id. Anonymous callers get a key from
a pluggable resolver: the client network address by default (shared by every
client behind the same address), or an opaque client-supplied token header.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from fastapi import Request

from gammy_feed.core.settings import settings
from gammy_feed.models import User


@dataclass(frozen=True)
class ActorIdentity:
    """Who performed a mutating action."""

    key: str
    user_id: int | None
    name: str

    @property
    def is_anonymous(self) -> bool:
        return self.user_id is None


AnonymousKeyResolver = Callable[[Request], str]


def user_actor_key(user_id: int) -> str:
    return f"user:{user_id}"


def address_key(request: Request) -> str:
    host = request.client.host if request.client else "unknown"
    return f"addr:{host}"


def client_token_key(request: Request) -> str:
    token = request.headers.get(settings.client_token_header, "").strip()
    if not token:
        return address_key(request)
    return f"token:{token}"


ANONYMOUS_KEY_RESOLVERS: dict[str, AnonymousKeyResolver] = {
    "address": address_key,
    "client_token": client_token_key,
}


def get_anonymous_key_resolver(strategy: str | None = None) -> AnonymousKeyResolver:
    """Return the resolver configured by ``ANONYMOUS_ACTOR_KEY``."""
    return ANONYMOUS_KEY_RESOLVERS[strategy or settings.anonymous_actor_key]


def resolve_actor(
    request: Request,
    user: User | None,
    resolver: AnonymousKeyResolver | None = None,
) -> ActorIdentity:
    """Build the actor identity for ``request``."""
    if user is not None:
        return ActorIdentity(key=user_actor_key(user.id), user_id=user.id, name=user.name)
    resolver = resolver or get_anonymous_key_resolver()
    return ActorIdentity(key=resolver(request), user_id=None, name=settings.guest_name)
