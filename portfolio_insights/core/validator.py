"""Input validation utilities."""

from __future__ import annotations

from typing import Iterable, List, Type, TypeVar, Union

from ..models.record import ALL, PortfolioRecord, Region, Segment

E = TypeVar("E", Segment, Region)

CHART_TYPES = ("bar", "line")


class ValidationError(Exception):
    """Custom error for validation related issues."""


def _normalize_choice(value: Union[str, E, None], enum_cls: Type[E], label: str) -> Union[str, E]:
    if value is None:
        return ALL
    if isinstance(value, enum_cls):
        return value
    text = str(value).strip()
    if not text or text.lower() == ALL:
        return ALL
    for member in enum_cls:
        if text == member.value or text.upper() == member.name:
            return member
    options = ", ".join(member.value for member in enum_cls)
    raise ValidationError(f"Unknown {label} {value!r}; expected 'all' or one of: {options}")


def normalize_segment_filter(value: Union[str, Segment, None]) -> Union[str, Segment]:
    """Resolve a segment filter to a ``Segment`` member or ``"all"``."""
    return _normalize_choice(value, Segment, "segment")


def normalize_region_filter(value: Union[str, Region, None]) -> Union[str, Region]:
    """Resolve a region filter to a ``Region`` member or ``"all"``."""
    return _normalize_choice(value, Region, "region")


def validate_chart_type(value: str) -> str:
    chart_type = str(value).strip().lower()
    if chart_type not in CHART_TYPES:
        raise ValidationError(f"Unsupported chart type {value!r}; expected one of {CHART_TYPES}")
    return chart_type


def validate_unique_customers(records: Iterable[PortfolioRecord]) -> None:
    """Ensure customer identifiers are unique."""
    seen = set()
    duplicates: List[str] = []
    for record in records:
        if record.customer_id in seen:
            duplicates.append(record.customer_id)
        else:
            seen.add(record.customer_id)
    if duplicates:
        raise ValidationError(
            "Duplicate customer_id values detected: " + ", ".join(sorted(set(duplicates)))
        )
