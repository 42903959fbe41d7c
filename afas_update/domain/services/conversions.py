"""Field derivations that combine or split several field values.

These run only when the caller allows value changes beyond reformatting.
Each function returns a new mapping and never fills a target field that
already has a value.
"""

from __future__ import annotations

from collections.abc import Mapping
import re

NAME_PREFIXES = (
    "de ",
    "v.",
    "v ",
    "v/d ",
    "v.d.",
    "van de ",
    "van der ",
    "van ",
    "'t ",
)
SPLIT_HOUSE_NUMBER_COUNTRIES = frozenset(
    {"B", "D", "DK", "F", "FIN", "H", "NL", "NO", "S"}
)
SEARCH_NAME_MAX_LENGTH = 10
INITIALS_MAX_LENGTH = 16

_INITIALS_SOURCE = re.compile(r"^[A-Za-z \-]+$")
_NAME_PART_SEPARATOR = re.compile(r"[- ]+")
_STREET_WITH_NUMBER = re.compile(r"^(.*?\S)\s+(\d+)(?:\s+)?(\S.{0,29})?\s*$")
_NUMBER_WITH_SUFFIX = re.compile(r"^\s*(\d+)(?:\s+)?(\S.{0,29})?\s*$")


def _empty(value: object) -> bool:
    return value is None or value == ""


def convert_name_fields(fields: Mapping[str, object]) -> dict[str, object]:
    """Derive prefix, initials and search name for a person."""
    result = dict(fields)

    last_name = result.get("LaNm")
    if isinstance(last_name, str) and last_name and _empty(result.get("Is")):
        last_name = last_name.strip()
        result["LaNm"] = last_name
        lowered = last_name.lower()
        for prefix in NAME_PREFIXES:
            if lowered.startswith(prefix):
                result["Is"] = prefix.rstrip()
                result["LaNm"] = last_name[len(prefix) :].strip()
                break

    first_name = result.get("FiNm")
    if isinstance(first_name, str) and first_name and _empty(result.get("In")):
        first_name = first_name.strip()
        result["FiNm"] = first_name
        if len(first_name) == 1 or (
            len(first_name) < INITIALS_MAX_LENGTH
            and "." in first_name
            and " " not in first_name
        ):
            result["In"] = (
                f"{first_name.upper()}." if len(first_name) == 1 else first_name
            )
            del result["FiNm"]
        elif _INITIALS_SOURCE.match(first_name):
            parts = [p for p in _NAME_PART_SEPARATOR.split(first_name) if p]
            result["In"] = "".join(f"{part[0].upper()}." for part in parts)

    last_name = result.get("LaNm")
    if isinstance(last_name, str) and last_name and _empty(result.get("SeNm")):
        result["SeNm"] = last_name.upper()[:SEARCH_NAME_MAX_LENGTH]

    return result


def convert_street_name(fields: Mapping[str, object]) -> dict[str, object]:
    """Split a house number and extension off the street, or off the number."""
    result = dict(fields)
    street = result.get("Ad")
    country = result.get("CoId")
    if (
        isinstance(street, str)
        and street
        and _empty(result.get("HmNr"))
        and _empty(result.get("HmAd"))
        and (_empty(country) or country in SPLIT_HOUSE_NUMBER_COUNTRIES)
    ):
        if match := _STREET_WITH_NUMBER.match(street):
            result["Ad"] = match.group(1).lstrip()
            result["HmNr"] = match.group(2)
            if match.group(3):
                result["HmAd"] = match.group(3).rstrip()
        return result

    number = result.get("HmNr")
    if isinstance(number, str) and number and _empty(result.get("HmAd")):
        match = _NUMBER_WITH_SUFFIX.match(number)
        if match and match.group(2):
            result["HmNr"] = match.group(1)
            result["HmAd"] = match.group(2).rstrip()
    return result
