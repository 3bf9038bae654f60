# app/routers/health.py
"""Liveness probe. No auth, no database round trip, not request-logged."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()


@router.get("/ping", response_class=PlainTextResponse, summary="Liveness check")
def ping():
    return "pong"
