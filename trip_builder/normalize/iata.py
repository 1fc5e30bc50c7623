"""Location code (IATA-style) validation."""

import re
from typing import Optional

from trip_builder.errors import InvalidIataCode

IATA_CODE_RE = re.compile(r'^[A-Z]{3}$')


def is_iata_code(code: Optional[str]) -> bool:
    return bool(code) and IATA_CODE_RE.fullmatch(code) is not None


def validate_iata_code(code: Optional[str], field_name: str) -> None:
    """Raise InvalidIataCode if a present code is not three uppercase letters.

    A missing code (None) is left for the required-field checks.
    """
    if code is None:
        return
    if not is_iata_code(code):
        raise InvalidIataCode(f"Invalid {field_name}: {code}", field=field_name, value=code)


def validate_home_location(code: Optional[str]) -> str:
    """Validate the configured home location, which is always required."""
    if not code:
        raise InvalidIataCode("IATA code is required", field="home_location", value=code)
    if not is_iata_code(code):
        raise InvalidIataCode(f"Invalid IATA code: {code}", field="home_location", value=code)
    return code
