from __future__ import annotations

FULL_MONTHS = {
    "january": 1,
    "february": 2,
    "march": 3,
    "april": 4,
    "may": 5,
    "june": 6,
    "july": 7,
    "august": 8,
    "september": 9,
    "october": 10,
    "november": 11,
    "december": 12,
}

ABBREVIATED_MONTHS = {name[:3]: num for name, num in FULL_MONTHS.items()}

# Monday = 1, like date.isoweekday().
FULL_WEEKDAYS = {
    "monday": 1,
    "tuesday": 2,
    "wednesday": 3,
    "thursday": 4,
    "friday": 5,
    "saturday": 6,
    "sunday": 7,
}

ABBREVIATED_WEEKDAYS = {name[:3]: num for name, num in FULL_WEEKDAYS.items()}


def _key(name: str) -> str:
    return name.strip().lower()


def is_full_month(name: str) -> bool:
    return _key(name) in FULL_MONTHS


def is_abbreviated_month(name: str) -> bool:
    return _key(name) in ABBREVIATED_MONTHS


def is_month_name(name: str) -> bool:
    return is_full_month(name) or is_abbreviated_month(name)


def month_number(name: str) -> int | None:
    """Return 1..12 for a full or three-letter month name, else None."""
    k = _key(name)
    return FULL_MONTHS.get(k) or ABBREVIATED_MONTHS.get(k)


def weekday_number(name: str) -> int | None:
    k = _key(name)
    return FULL_WEEKDAYS.get(k) or ABBREVIATED_WEEKDAYS.get(k)


def is_weekday_name(name: str) -> bool:
    return weekday_number(name) is not None
