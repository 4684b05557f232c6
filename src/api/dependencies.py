"""FastAPI dependencies for the manual trigger."""

import ipaddress

from fastapi import HTTPException, Request, status

from core.config import LOOPBACK_HOSTS, Settings, load_settings


def _is_loopback_peer(host: str | None) -> bool:
    if not host:
        return False
    if host == "localhost":
        return True
    try:
        address = ipaddress.ip_address(host)
    except ValueError:
        return False
    mapped = getattr(address, "ipv4_mapped", None)
    return address.is_loopback or bool(mapped and mapped.is_loopback)


async def require_loopback_host(request: Request) -> str:
    """
    Only allow loopback clients that address a loopback host.

    Both the Host header and the peer address must be loopback; the header
    alone can be set by any client.

    Raises:
        HTTPException: 403 otherwise
    """
    hostname = request.url.hostname or ""
    peer = request.client.host if request.client else None
    if hostname not in LOOPBACK_HOSTS or not _is_loopback_peer(peer):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Status endpoint is only available in development mode",
        )
    return hostname


def get_settings() -> Settings:
    """Settings for this request; raises ConfigError if incomplete."""
    return load_settings()
