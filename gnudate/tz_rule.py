"""
Interpreting `TZ="RULE"` prefixes.

A date string may start with `TZ="RULE"` to interpret that one date in
another time zone.  The quotes are required and any quotes or
backslashes inside the rule are escaped with a backslash.  A rule is
either proleptic (an abbreviation and an offset, POSIX style) or
geographical (the name of a zone in the time zone database).


Grammar
-------

```
<tz-prefix> ::= ("TZ" | "tz") '="' (<proleptic> | <geographical>) '"'
<proleptic> ::= <letter>{3,} (("+" | "-")? <hh> (":" <mm> (":" <ss>)?)?)?
<geographical> ::= ":"? (<escape> | !('"' | "\\"))*
<escape> ::= "\\" <any>
```

Quirks, kept for compatibility:

* The letters of a proleptic rule are ignored and its offset counts
  east of UTC, so `UTC+5` is five hours ahead of UTC.
* Offset fields are clamped rather than rejected: hours to 24, minutes
  and seconds to 59.
* DST rules after the offset (`EST5EDT,M3.2.0,M11.1.0`) are not
  interpreted.  Such a rule does not match as proleptic and, as a
  geographical name, falls back to UTC.
* Unknown zone names and file paths fall back to UTC instead of failing.
"""


# Copyright (c) 2020 Aubrey Barnard.
#
# This is free software released under the MIT License
# (https://choosealicense.com/licenses/mit/).


import logging
import os.path
import re

from dateutil import tz

from .errors import ParseError
from .lexical import skip_space


_logger = logging.getLogger(__name__)

_prefix_pattern = re.compile(r'(?:TZ|tz)="')

_proleptic_pattern = re.compile(
    r'(?P<name>[A-Za-z]{3,})'
    r'(?:(?P<sign>[+-])?(?P<hours>\d{1,2})'
    r'(?::(?P<minutes>\d{1,2})(?::(?P<seconds>\d{1,2}))?)?)?'
    r'"')

_geographical_pattern = re.compile(r':?(?P<name>(?:[^"\\]|\\.)*)"', re.S)

_escape_pattern = re.compile(r'\\(.)', re.S)

_max_hours = 24
_max_minutes = 59
_max_seconds = 59


def proleptic(text, pos):
    match = _proleptic_pattern.match(text, pos)
    if match is None:
        return None
    hours = min(int(match.group('hours') or 0), _max_hours)
    minutes = min(int(match.group('minutes') or 0), _max_minutes)
    seconds = min(int(match.group('seconds') or 0), _max_seconds)
    offset = hours * 3600 + minutes * 60 + seconds
    if match.group('sign') == '-':
        offset = -offset
    _logger.debug('Proleptic TZ rule %r: %+d seconds',
                  match.group(0)[:-1], offset)
    return tz.tzoffset(None, offset), match.end()


def lookup_zone(name):
    """
    Look up a zone in the time zone database, falling back to UTC for
    empty, unknown, or unreadable names, for file paths, and for POSIX
    rule strings.
    """
    zone = None
    # Only zone database names, never paths to arbitrary files
    if name and not os.path.isabs(name) and '..' not in name.split('/'):
        try:
            zone = tz.gettz(name)
        except (ValueError, OSError) as error:
            _logger.debug('Unreadable time zone %r: %s', name, error)
    if zone is None or isinstance(zone, tz.tzstr):
        _logger.debug('Unknown time zone %r, using UTC', name)
        return tz.UTC
    return zone


def geographical(text, pos):
    match = _geographical_pattern.match(text, pos)
    if match is None:
        return None
    name = _escape_pattern.sub(r'\1', match.group('name'))
    _logger.debug('Geographical TZ rule %r', name)
    return lookup_zone(name), match.end()


def match(text, pos=0):
    """
    Match a `TZ="RULE"` prefix at `pos`, after any whitespace.

    Returns `(tzinfo, end)`, or `None` if there is no prefix.  Raises
    `ParseError` if the prefix is not terminated by a quote.
    """
    pos = skip_space(text, pos)
    prefix = _prefix_pattern.match(text, pos)
    if prefix is None:
        return None
    for alternative in (proleptic, geographical):
        result = alternative(text, prefix.end())
        if result is not None:
            return result
    raise ParseError.at(text, pos, 'unterminated TZ rule')
