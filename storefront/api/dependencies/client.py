"""Caller network origin resolution."""

from __future__ import annotations

from fastapi import Request
from slowapi.util import get_remote_address

MAX_ADDRESS_LENGTH = 64


def get_client_address(request: Request) -> str:
    """Return the peer address used to key throttling.

    Forwarded headers are client controlled and are not read here. Behind a
    reverse proxy, run uvicorn with ``--proxy-headers --forwarded-allow-ips``
    so the peer address is rewritten only for trusted hops.
    """

    return (get_remote_address(request) or "unknown")[:MAX_ADDRESS_LENGTH]


__all__ = ["get_client_address"]
