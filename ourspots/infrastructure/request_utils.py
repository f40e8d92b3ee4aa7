"""Client identification for rate limiting."""
from starlette.requests import Request


def get_client_ip(request: Request) -> str:
    """Resolve the client IP behind a reverse proxy.

    Order: ``X-Real-IP``, first hop of ``X-Forwarded-For``, socket peer.
    """
    real_ip = request.headers.get("X-Real-IP", "").strip()
    if real_ip:
        return real_ip

    forwarded = request.headers.get("X-Forwarded-For", "").strip()
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    if request.client and request.client.host:
        return request.client.host
    return "unknown"
