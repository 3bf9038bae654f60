# app/middlewares/validate_fields.py
"""
Declarative presence/shape checks for request bodies.

    validate_fields(
        check("email", "El email es obligatorio").is_email(),
        check("password", "El password es obligatorio").not_empty(),
    )

Every rule is evaluated; failures are collected into a single 400 keyed by
field name and the handler is never invoked. Dates are not this module's
concern (see validate_date).
"""

from typing import Any, Callable

from email_validator import EmailNotValidError, validate_email
from fastapi import Depends

from app.middlewares.request_body import json_body
from app.utils.errors import ValidationError


def _not_empty(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    return True


def _is_email(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        # Intranet domains (empresa.local) are valid login names
        validate_email(value, check_deliverability=False, globally_deliverable=False)
    except EmailNotValidError:
        return False
    return True


class FieldCheck:
    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        self.predicates: list[Callable[[Any], bool]] = []

    def not_empty(self) -> "FieldCheck":
        self.predicates.append(_not_empty)
        return self

    def is_email(self) -> "FieldCheck":
        self.predicates.append(_is_email)
        return self

    def passes(self, body: dict) -> bool:
        value = body.get(self.field)
        return all(predicate(value) for predicate in self.predicates)

    def error(self, body: dict) -> dict:
        return {
            "type": "field",
            "value": body.get(self.field),
            "msg": self.message,
            "path": self.field,
            "location": "body",
        }


def check(field: str, message: str) -> FieldCheck:
    return FieldCheck(field, message)


def validate_fields(*checks: FieldCheck):
    def dependency(body: dict = Depends(json_body)) -> dict:
        errors = {}
        for rule in checks:
            # First failing rule per field wins
            if rule.field not in errors and not rule.passes(body):
                errors[rule.field] = rule.error(body)
        if errors:
            raise ValidationError({"ok": False, "errors": errors})
        return body

    return dependency
