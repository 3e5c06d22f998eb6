"""
Parse free-form date strings the way GNU `date --date` does.

A date string is a sequence of items in any order, optionally preceded
by a `TZ="RULE"` prefix, for example

```
jul 18, 2024 06:14:49
2 days ago
next thu
@1690466034
TZ="America/New_York" 2024-07-18 10:00 +1 hour
```

Use `parse_datetime` to resolve a string against the current time, or
`parse_datetime_at_date` to resolve it against a given base instant.
Both return an aware `datetime` with a fixed offset.  Item names are
matched case insensitively; the zone name in a TZ rule keeps its case.
"""


# Copyright (c) 2020 Aubrey Barnard.
#
# This is free software released under the MIT License
# (https://choosealicense.com/licenses/mit/).


import logging

from . import items
from . import resolve
from . import tz_rule
from .errors import DateTimeError, InvalidInputError, ParseError


__version__ = '0.1.0'

__all__ = [
    'DateTimeError',
    'InvalidInputError',
    'ParseError',
    'parse',
    'parse_datetime',
    'parse_datetime_at_date',
]


logging.getLogger(__name__).addHandler(logging.NullHandler())


def _lower(char):
    # Characters whose lowercase form is longer are kept so that
    # positions in the lowercased text are positions in the original
    lowered = char.lower()
    return lowered if len(lowered) == 1 else char


def parse(text):
    """
    Read `text` without resolving it.

    Returns a `(tzinfo, builder)` pair where `tzinfo` is the zone of the
    TZ prefix, or `None` if there is none, and `builder` holds the items
    that follow.  The column and text of a `ParseError` refer to `text`
    as given.
    """
    zone, pos = None, 0
    rule = tz_rule.match(text)
    if rule is not None:
        zone, pos = rule
    # Only the items are lowercased: zone names are case sensitive
    lowered = text[:pos] + ''.join(map(_lower, text[pos:]))
    try:
        return zone, items.parse(lowered, pos)
    except ParseError as error:
        if error.column is not None:
            error.text = text[error.column - 1:]
        raise


def _in_zone(base, zone):
    try:
        return resolve.fixed_offset(base.astimezone(zone))
    except (ValueError, OverflowError) as error:
        raise InvalidInputError() from error


def parse_datetime_at_date(base, text):
    """
    Parse `text` and resolve it against the instant `base`.

    A naive `base` is taken as local time.  Raises `ParseError` if the
    text cannot be read and `InvalidInputError` if it does not denote a
    representable instant.
    """
    zone, builder = parse(text)
    base = resolve.fixed_offset(base)
    if zone is not None:
        base = _in_zone(base, zone)
    return resolve.resolve(builder, base)


def parse_datetime(text):
    """Parse `text` and resolve it against the current local time."""
    return parse_datetime_at_date(resolve.now(), text)
