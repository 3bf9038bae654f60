# app/middlewares/validate_jwt.py
"""
Authorization gate for protected routes.

Reads the bearer token from the `x-token` header, verifies it and hands the
user id to the handler (also stored on request.state.usuario_id). There is
no role model: any valid token authorizes any protected operation.

The client has always seen different messages depending on the resource
family, so each family gets its own gate instance with its own payloads.
"""

from typing import Optional

from fastapi import Header, Request

from app.utils.errors import AuthenticationError
from app.utils.tokens import verify_token


class TokenGate:
    def __init__(self, missing: dict, invalid: dict, missing_status: int = 401):
        self.missing = missing
        self.invalid = invalid
        self.missing_status = missing_status

    def __call__(self, request: Request, x_token: Optional[str] = Header(default=None)) -> int:
        if not x_token:
            raise AuthenticationError(self.missing, status_code=self.missing_status)

        valid, user_id = verify_token(x_token)
        if not valid:
            raise AuthenticationError(self.invalid)

        request.state.usuario_id = user_id
        return user_id


# Listings, lookups, deletes, renew
require_token = TokenGate(
    missing={"ok": False, "msg": "No hay token"},
    invalid={"ok": False, "msg": "Token no válido"},
    missing_status=400,
)

# Vehicle entry and external visitor writes
entry_token = TokenGate(
    missing={"ok": False, "mensaje": "Token no proporcionado"},
    invalid={"ok": False, "mensaje": "Token inválido"},
)

# Employee departure writes
internal_token = TokenGate(
    missing={"ok": False, "msg": "Token no proporcionado"},
    invalid={"ok": False, "msg": "Token inválido"},
)

# Turnstile writes
turnstile_token = TokenGate(
    missing={"ok": False, "mensaje": "Token no válido o expirado."},
    invalid={"ok": False, "mensaje": "Token no válido o expirado."},
)
