# app/middlewares/request_body.py
"""Shared JSON body dependency. FastAPI caches it per request, so every
validator in a route's chain and the handler itself see the same dict."""

from fastapi import Request


async def json_body(request: Request) -> dict:
    try:
        body = await request.json()
    except ValueError:
        # Empty body or not JSON: validators treat every field as absent
        return {}
    return body if isinstance(body, dict) else {}
