"""
Purpose: Classify text typed into an address box.

coordinates  - "lat,lng" or "lat lng", both in valid ranges
postal code  - exactly six digits
address      - anything else (malformed coordinates fall through here too)
"""

from __future__ import annotations

import re

from .models import InputKind, ParsedInput

COORDINATE_PATTERN = re.compile(r"^(-?\d+\.?\d*)[,\s]+(-?\d+\.?\d*)$")
POSTAL_CODE_PATTERN = re.compile(r"^(\d{6})$")


def parse_input(text: str) -> ParsedInput:
    stripped = text.strip()

    match = COORDINATE_PATTERN.match(stripped)
    if match:
        lat = float(match.group(1))
        lng = float(match.group(2))
        if -90 <= lat <= 90 and -180 <= lng <= 180:
            return ParsedInput(kind=InputKind.COORDINATES, lat=lat, lng=lng)

    match = POSTAL_CODE_PATTERN.match(stripped)
    if match:
        return ParsedInput(kind=InputKind.POSTAL_CODE, postal_code=match.group(1))

    return ParsedInput(kind=InputKind.ADDRESS, address=stripped)
