import re
from collections.abc import Iterable

# Excel limits worksheet titles to 31 characters.
MAX_SHEET_NAME_LENGTH = 31

_INVALID_CHARS_RE = re.compile(r"[\[\]:*?/\\]")


def clean_sheet_name(name: str) -> str:
    """Remove characters Excel rejects in sheet titles and bound the length."""
    cleaned = _INVALID_CHARS_RE.sub("", name)[:MAX_SHEET_NAME_LENGTH]
    # Excel rejects titles that start or end with an apostrophe.
    return cleaned.strip().strip("'").strip() or "Sheet"


def unique_sheet_names(names: Iterable[str]) -> list[str]:
    """Clean every name and disambiguate duplicates with a ' (n)' suffix.

    Uniqueness is case-insensitive, like Excel's.
    """
    result: list[str] = []
    seen: set[str] = set()
    for name in names:
        candidate = clean_sheet_name(name)
        counter = 2
        while candidate.lower() in seen:
            suffix = f" ({counter})"
            base = clean_sheet_name(name)[: MAX_SHEET_NAME_LENGTH - len(suffix)]
            candidate = f"{base}{suffix}"
            counter += 1
        seen.add(candidate.lower())
        result.append(candidate)
    return result
