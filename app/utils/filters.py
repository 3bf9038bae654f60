# app/utils/filters.py
"""Optional search criteria for listing queries."""

from sqlalchemy import or_
from sqlalchemy.orm import Query


def _term(value) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()


def contains(query: Query, column, value) -> Query:
    """Add `column ILIKE %value%` when value is a non-blank string."""
    term = _term(value)
    if not term:
        return query
    return query.filter(column.ilike(f"%{term}%"))


def contains_or_null(query: Query, column, value) -> Query:
    """Like contains(), but rows where the column is NULL still match."""
    term = _term(value)
    if not term:
        return query
    return query.filter(or_(column.is_(None), column.ilike(f"%{term}%")))


def paginate(query: Query, limit: int, offset: int) -> Query:
    return query.limit(limit).offset(offset)
