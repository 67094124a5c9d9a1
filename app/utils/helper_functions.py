import json
from typing import Any, Optional

from fastapi import Request


def get_client_address(request: Request, trust_proxy_headers: bool = False) -> str:
    """Return the network address a request came from.

    Args:
        request: Incoming request
        trust_proxy_headers: Use the first X-Forwarded-For entry when present

    Returns:
        The caller's address, or "unknown" when the server cannot tell
    """
    if trust_proxy_headers:
        forwarded_for: Optional[str] = request.headers.get("x-forwarded-for")
        if forwarded_for:
            first_hop = forwarded_for.split(",")[0].strip()
            if first_hop:
                return first_hop

    if request.client and request.client.host:
        return request.client.host
    return "unknown"


async def read_json_body(request: Request) -> Any:
    """Decode a JSON request body, returning None when it is empty or not valid JSON."""
    body = await request.body()
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError:
        return None
