"""Common API dependencies."""

from fastapi import Request


def get_client_ip(request: Request) -> str:
    """Client address: first X-Forwarded-For hop, else the socket peer."""
    forwarded = request.headers.get("x-forwarded-for", "")
    first = forwarded.split(",")[0].strip()
    if first:
        return first
    return request.client.host if request.client else "-"
