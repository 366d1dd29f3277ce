"""City name validation and normalisation."""

from __future__ import annotations

from services.weatherapi.errors import ValidationError

MIN_CITY_LENGTH = 2


def normalize_city(raw: object) -> str:
    """
    Validate a raw city value and return its lookup key.

    ' Paris ' -> 'paris'
    'PARIS'   -> 'paris'

    The returned form (trimmed, lower-cased) is the only key the store is
    ever queried with.
    """
    if raw is None:
        raise ValidationError("City name is required.")
    if not isinstance(raw, str):
        raise ValidationError("City name must be a string.")

    trimmed = raw.strip()
    if not trimmed:
        raise ValidationError("City name cannot be empty.")
    if len(trimmed) < MIN_CITY_LENGTH:
        raise ValidationError(f"City name must be at least {MIN_CITY_LENGTH} characters long.")

    return trimmed.lower()
