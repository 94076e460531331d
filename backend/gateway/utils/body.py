"""
Request Body Decoding
=====================

SIM900 AT-command HTTP stacks and ESP32 sketches are not consistent about
Content-Type. Bodies are decoded by declared type:

- application/json (and +json)          -> parsed JSON
- application/x-www-form-urlencoded      -> dict of fields
- anything else with a body              -> text
- empty body                             -> None
"""

import json
from typing import Any, Union
from urllib.parse import parse_qsl

from fastapi import Request

from gateway.exceptions import MalformedBodyError, PayloadTooLargeError

Body = Union[dict[str, Any], list, str, None]


def _media_type(request: Request) -> str:
    return request.headers.get("content-type", "").split(";")[0].strip().lower()


async def read_body(request: Request, limit: int) -> Body:
    """
    Read and decode the request body.

    Args:
        request: Incoming request
        limit: Maximum body size in bytes

    Raises:
        PayloadTooLargeError: If the body is bigger than `limit`
        MalformedBodyError: If a JSON body does not parse
    """
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise PayloadTooLargeError("Request body too large.")

    raw = await request.body()
    if len(raw) > limit:
        raise PayloadTooLargeError("Request body too large.")
    if not raw:
        return None

    media_type = _media_type(request)
    text = raw.decode("utf-8", errors="replace")

    if media_type == "application/json" or media_type.endswith("+json"):
        try:
            return json.loads(text)
        except ValueError:
            raise MalformedBodyError("Invalid JSON body.")

    if media_type == "application/x-www-form-urlencoded":
        return dict(parse_qsl(text, keep_blank_values=True))

    return text


async def read_fields(request: Request, limit: int) -> dict[str, Any]:
    """Like read_body(), but anything that is not a mapping counts as no fields."""
    body = await read_body(request, limit)
    return body if isinstance(body, dict) else {}
