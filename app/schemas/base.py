# app/schemas/base.py
"""
Base for request bodies.

Every field is optional at the type level so a missing value never turns
into pydantic's own 422: each controller decides required-ness from the
`required` tuple and answers with the message its client expects.
"""

from datetime import datetime
from typing import Annotated, ClassVar, Optional

from pydantic import BaseModel, BeforeValidator, Field

from app.middlewares.validate_date import coerce_timestamp

# Client timestamp, stored as naive local time
Timestamp = Annotated[Optional[datetime], BeforeValidator(coerce_timestamp)]

Limit = Annotated[int, Field(ge=0)]
Offset = Annotated[int, Field(ge=0)]


class RequestModel(BaseModel):
    required: ClassVar[tuple[str, ...]] = ()
    # False: only an absent or null field is missing, "" is accepted
    blank_is_missing: ClassVar[bool] = True

    def missing(self) -> list[str]:
        """Required fields that are absent (or blank, when blank_is_missing)."""
        missing = []
        for name in self.required:
            value = getattr(self, name)
            blank = self.blank_is_missing and isinstance(value, str) and not value.strip()
            if value is None or blank:
                missing.append(name)
        return missing

    def provided(self, name: str) -> bool:
        """True when the client sent the field, even as null."""
        return name in self.model_fields_set

    class Config:
        extra = "ignore"
        populate_by_name = True
        coerce_numbers_to_str = True
