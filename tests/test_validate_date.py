# tests/test_validate_date.py
"""Unit tests for the client timestamp parser and the date validation dependency."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import datetime, timedelta, timezone
from app.middlewares.validate_date import DATE_ERROR, coerce_timestamp, parse_date, validate_dates
from app.utils.errors import ValidationError


class TestParseDate:
    def test_date_only(self):
        assert parse_date("2025-10-05") == datetime(2025, 10, 5)

    def test_space_separated_time(self):
        assert parse_date("2025-10-05 14:30:00") == datetime(2025, 10, 5, 14, 30)

    def test_iso_with_zulu_and_fraction(self):
        parsed = parse_date("2025-10-05T14:30:00.123Z")
        assert parsed == datetime(2025, 10, 5, 14, 30, 0, 123000, tzinfo=timezone.utc)

    def test_iso_with_offset(self):
        parsed = parse_date("2025-10-05T14:30:00+02:00")
        assert parsed.utcoffset() == timedelta(hours=2)

    @pytest.mark.parametrize("value", [
        "2025-02-30",              # not a calendar date
        "2025-13-01",
        "2025-10-05 25:00:00",
        "5 de octubre",            # locale format
        "05/10/2025",
        "2025-10-05T14:30",        # seconds are mandatory
        "2025-10-05abc",
        "2025-01-05\n",            # trailing newline
        "2025-10-05\t14:30:00",    # only space or T separate the time
        "2025-10-05\n14:30:00",
    ])
    def test_malformed_is_rejected(self, value):
        assert parse_date(value) is None

    @pytest.mark.parametrize("value", ["", None, 20251005, ["2025-10-05"]])
    def test_absent_or_non_string(self, value):
        assert parse_date(value) is None

    def test_future_is_rejected(self):
        tomorrow = (datetime.now() + timedelta(days=1)).strftime("%Y-%m-%d")
        assert parse_date(tomorrow) is None

    def test_future_with_offset_is_rejected(self):
        later = (datetime.now(timezone.utc) + timedelta(hours=1)).strftime("%Y-%m-%dT%H:%M:%SZ")
        assert parse_date(later) is None

    def test_leap_day(self):
        assert parse_date("2024-02-29") == datetime(2024, 2, 29)
        assert parse_date("2025-02-29") is None


class TestCoerceTimestamp:
    def test_blank_is_none(self):
        assert coerce_timestamp("") is None
        assert coerce_timestamp(None) is None

    def test_offset_converted_to_local_naive(self):
        expected = datetime(2025, 10, 5, 12, 0, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
        assert coerce_timestamp("2025-10-05T12:00:00Z") == expected

    def test_naive_kept(self):
        assert coerce_timestamp("2025-10-05 08:00:00") == datetime(2025, 10, 5, 8, 0)

    def test_invalid_raises(self):
        with pytest.raises(ValueError):
            coerce_timestamp("ayer")
        with pytest.raises(ValueError):
            coerce_timestamp(12)


class TestValidateDates:
    def test_valid_body_is_returned(self):
        dependency = validate_dates("fecha_entrada", "fecha_salida")
        body = {"fecha_entrada": "2025-03-10 08:00:00", "nombre": "x"}
        assert dependency(body=body) is body

    def test_absent_fields_are_skipped(self):
        dependency = validate_dates("fecha_entrada")
        assert dependency(body={"fecha_entrada": ""}) == {"fecha_entrada": ""}

    def test_first_invalid_field_is_named(self):
        dependency = validate_dates("fecha_entrada", "fecha_salida")
        with pytest.raises(ValidationError) as exc:
            dependency(body={"fecha_entrada": "2025-03-10", "fecha_salida": "10/03/2025"})
        assert exc.value.status_code == 400
        assert exc.value.payload == {"ok": False, "mensaje": DATE_ERROR.format(field="fecha_salida")}

    def test_error_message_text(self):
        assert DATE_ERROR.format(field="fecha") == (
            "El campo 'fecha' tiene un formato de fecha inválido, "
            "no sigue el formato YYYY-MM-DD, o es una fecha futura."
        )
