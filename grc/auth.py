"""Caller identity resolved at the transport boundary.

Authentication itself happens upstream; the gateway forwards the
authenticated user id in a header (``Settings.caller_header``). Every
service function receives the resulting ``Caller`` explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request


@dataclass(frozen=True)
class Caller:
    """The authenticated user issuing a request."""

    user_id: str


async def get_caller(request: Request) -> Caller | None:
    """Return the caller for this request, or None when unauthenticated."""
    header = request.app.state.settings.caller_header
    user_id = (request.headers.get(header) or "").strip()
    if not user_id:
        return None
    return Caller(user_id=user_id)
