"""Client address extraction for the configured IP source."""

import ipaddress
from typing import Optional

from starlette.requests import Request

_HEADER_SOURCES = {
    "XRealIp": "x-real-ip",
    "CfConnectingIp": "cf-connecting-ip",
    "TrueClientIp": "true-client-ip",
    "FlyClientIp": "fly-client-ip",
}


class ClientAddressError(Exception):
    """Raised when the client address cannot be determined from the request."""


def resolve_client_ip(request: Request, source: str) -> str:
    """Return the client IP address of *request* according to *source*.

    ``ConnectInfo`` uses the socket peer address. ``RightmostXForwardedFor``
    takes the last entry of X-Forwarded-For, which is the one appended by the
    closest proxy. The remaining sources read a single-address header.
    """
    if source == "ConnectInfo":
        candidate = request.client.host if request.client else None
    elif source == "RightmostXForwardedFor":
        candidate = _rightmost_forwarded_for(request)
    elif source in _HEADER_SOURCES:
        candidate = request.headers.get(_HEADER_SOURCES[source])
    else:
        raise ClientAddressError(f"unknown ip source {source!r}")

    if not candidate:
        raise ClientAddressError(f"no client address available from {source}")

    try:
        return str(ipaddress.ip_address(candidate.strip()))
    except ValueError:
        raise ClientAddressError(f"{source} yielded an invalid address: {candidate!r}")


def _rightmost_forwarded_for(request: Request) -> Optional[str]:
    values = request.headers.getlist("x-forwarded-for")
    if not values:
        return None
    entries = [part.strip() for part in values[-1].split(",") if part.strip()]
    return entries[-1] if entries else None
