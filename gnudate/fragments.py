"""
Parsers for the fragments that make up date items.

Each fragment class has a static `match(text, pos)` that skips leading
whitespace and then either returns a `(fragment, end)` pair, where `end`
is the index just past the fragment, or returns `None` without
consuming anything.  A `None` is an ordinary backtracking signal that
lets the caller try the next alternative, so no exceptions are raised
here for input that merely is not the fragment being looked for.


Grammar
-------

```
# Calendar dates
<date> ::=
    | <year> "-" <month-number> "-" <day>      # 2022-11-14, 22-11-14
    | <month-number> "/" <day> ("/" <year>)?   # 11/14/2022, 11/14
    | <day> ("-" | <space>?) <month-name> "."? (("-" | <space>?) <year4>)?
    | <month-name> "."? ("-" | <space>?) <day> (("," | "-" | <space>) <year4>)?

# Times of day
<time> ::=
    | <hour> ":" <minute> (":" <second> (("." | ",") <digit>+)?)?
      <meridian>? <offset>?
    | <hour> <meridian> <offset>?
<meridian> ::= "am" | "pm" | "a.m." | "p.m."

# Offsets from UTC
<offset> ::=
    | ("+" | "-") <hour> (":"? <minute>)?
    | <zone-name> (("+" | "-") <hour> (":"? <minute>)? | <hour>)?

# Combined date and time
<date-time> ::= <iso-date> ("t" | <space>) <time>

# Relative items
<relative> ::=
    | (<number> | <ordinal>)? <unit> "ago"?
    | "yesterday" | "tomorrow" | "today" | "now"

# Weekdays
<weekday> ::= (<integer> | <ordinal>)? <weekday-name> "."? ","?

<epoch> ::= "@" <integer>
<year-item> ::= <digit>{4}
```

Four-digit years after literal dates are not taken when followed by a
colon, dash, or slash so that `jul 18 06:14:49` leaves `06` for the
time of day.  A numeric offset is not taken when a relative unit
follows it, so that `utc +2 days` reads as UTC plus a two-day shift.
"""


# Copyright (c) 2020 Aubrey Barnard.
#
# This is free software released under the MIT License
# (https://choosealicense.com/licenses/mit/).


import datetime
import re

from . import lexical
from .lexical import skip_space


class Fragment:

    def __eq__(self, other):
        return (type(self) is type(other)
                and self.__dict__ == other.__dict__)

    def __hash__(self):
        return hash((type(self), tuple(self.__dict__.items())))


# Offsets


class Offset(Fragment):
    """A fixed offset from UTC in seconds east."""

    numeric_pattern = re.compile(
        r'(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?(?!\d)')
    unsigned_pattern = re.compile(
        r'(?P<sign>)(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?(?!\d)')
    name_pattern = re.compile(r'[a-z]+')

    def __init__(self, seconds):
        self.seconds = seconds

    def __repr__(self):
        return f'Offset({self.seconds!r})'

    def tzinfo(self):
        # Raises `ValueError` if the offset is a day or more
        return datetime.timezone(datetime.timedelta(seconds=self.seconds))

    @staticmethod
    def _match_number(pattern, text, pos):
        match = pattern.match(text, pos)
        if match is None or lexical.unit_follows(text, match.end()):
            return None
        seconds = (int(match.group('hours')) * 3600
                   + int(match.group('minutes') or 0) * 60)
        if match.group('sign') == '-':
            seconds = -seconds
        return seconds, match.end()

    @staticmethod
    def match(text, pos):
        pos = skip_space(text, pos)
        number = Offset._match_number(Offset.numeric_pattern, text, pos)
        if number is not None:
            seconds, end = number
            return Offset(seconds), end
        name = Offset.name_pattern.match(text, pos)
        if name is None or name.group(0) not in lexical.zones:
            return None
        seconds = lexical.zones[name.group(0)]
        end = name.end()
        # A signed adjustment may be spaced apart from the name, an
        # unsigned one must be attached to it
        number = (
            Offset._match_number(
                Offset.numeric_pattern, text, skip_space(text, end))
            or Offset._match_number(Offset.unsigned_pattern, text, end))
        if number is not None:
            adjustment, end = number
            seconds += adjustment
        return Offset(seconds), end


# Calendar dates


class Date(Fragment):

    iso_pattern = re.compile(
        r'(?P<year>\d{2,})-(?P<month>\d{1,2})-(?P<day>\d{1,2})(?!\d)')
    us_pattern = re.compile(
        r'(?P<month>\d{1,2})/(?P<day>\d{1,2})(?:/(?P<year>\d{2,}))?(?!\d)')
    day_first_pattern = re.compile(
        rf'(?P<day>\d{{1,2}})(?:-|\s*)(?P<month>{lexical.month_pattern})\.?'
        r'(?:(?:-|\s*)(?P<year>\d{4})(?![-/:\d]))?')
    month_first_pattern = re.compile(
        rf'(?P<month>{lexical.month_pattern})\.?(?:-|\s*)'
        r'(?P<day>\d{1,2})(?!\d)'
        r'(?:(?:\s*,\s*|-|\s+)(?P<year>\d{4})(?![-/:\d]))?')

    def __init__(self, day, month, year=None):
        self.day = day
        self.month = month
        self.year = year

    def __repr__(self):
        return f'Date({self.day!r}, {self.month!r}, {self.year!r})'

    @staticmethod
    def from_match(match):
        month = match.group('month')
        month = lexical.months[month] if month.isalpha() else int(month)
        year = match.group('year')
        if year is not None:
            year = lexical.expand_year(year)
        return Date(int(match.group('day')), month, year)

    @staticmethod
    def match(text, pos):
        pos = skip_space(text, pos)
        for pattern in (
                Date.iso_pattern,
                Date.us_pattern,
                Date.day_first_pattern,
                Date.month_first_pattern,
        ):
            match = pattern.match(text, pos)
            if match is not None:
                return Date.from_match(match), match.end()
        return None


# Times of day


class Time(Fragment):

    pattern = re.compile(
        r'(?P<hour>\d{1,2}):(?P<minute>\d{2})'
        r'(?::(?P<second>\d{2})(?:[.,](?P<fraction>\d+))?)?(?!\d)')
    hour_pattern = re.compile(r'(?P<hour>\d{1,2})(?!\d)')
    meridian_pattern = re.compile(r'(?P<half>[ap])(?:m|\.m\.)(?![a-z])')

    def __init__(self, hour, minute, second=0.0, offset=None):
        self.hour = hour
        self.minute = minute
        self.second = second
        self.offset = offset

    def __repr__(self):
        return (f'Time({self.hour!r}, {self.minute!r}, '
                f'{self.second!r}, {self.offset!r})')

    @staticmethod
    def match(text, pos):
        pos = skip_space(text, pos)
        match = Time.pattern.match(text, pos)
        if match is not None:
            hour = int(match.group('hour'))
            minute = int(match.group('minute'))
            second, fraction = match.group('second', 'fraction')
            if second is None:
                second = 0.0
            elif fraction is None:
                second = float(second)
            else:
                second = float(f'{second}.{fraction}')
            needs_meridian = False
        else:
            match = Time.hour_pattern.match(text, pos)
            if match is None:
                return None
            hour, minute, second = int(match.group('hour')), 0, 0.0
            needs_meridian = True
        end = match.end()
        # 12-hour clock
        meridian = Time.meridian_pattern.match(text, skip_space(text, end))
        if meridian is not None:
            if not 1 <= hour <= 12:
                return None
            hour %= 12
            if meridian.group('half') == 'p':
                hour += 12
            end = meridian.end()
        elif needs_meridian:
            return None
        # Embedded offset
        offset = Offset.match(text, end)
        if offset is not None:
            offset, end = offset
        return Time(hour, minute, second, offset), end


# Combined date and time


class DateTime(Fragment):

    separator_pattern = re.compile(r't|\s+')

    def __init__(self, date, time):
        self.date = date
        self.time = time

    def __repr__(self):
        return f'DateTime({self.date!r}, {self.time!r})'

    @staticmethod
    def match(text, pos):
        pos = skip_space(text, pos)
        match = Date.iso_pattern.match(text, pos)
        if match is None:
            return None
        separator = DateTime.separator_pattern.match(text, match.end())
        if separator is None:
            return None
        time = Time.match(text, separator.end())
        if time is None:
            return None
        time, end = time
        return DateTime(Date.from_match(match), time), end


# Weekdays


class Weekday(Fragment):
    """
    A day of the week and a signed count of weeks: 0 is "this", -1 is
    "last", 1 is "next", and N is the N-th occurrence.
    """

    pattern = re.compile(
        rf'(?:(?P<number>[+-]?\d+)\s*|(?P<ordinal>{lexical.ordinal_pattern})'
        r'\s*)?'
        rf'(?P<day>{lexical.weekday_pattern})\.?(?:\s*,)?')

    def __init__(self, offset, day):
        self.offset = offset
        self.day = day

    def __repr__(self):
        return f'Weekday({self.offset!r}, {self.day!r})'

    @staticmethod
    def match(text, pos):
        pos = skip_space(text, pos)
        match = Weekday.pattern.match(text, pos)
        if match is None:
            return None
        number, ordinal, day = match.group('number', 'ordinal', 'day')
        if number is not None:
            offset = int(number)
        elif ordinal is not None:
            offset = lexical.ordinals[ordinal]
        else:
            offset = 0
        return Weekday(offset, lexical.weekdays[day]), match.end()


# Relative items


class Relative(Fragment):
    """
    A signed shift by a number of units.  `unit` is one of "years",
    "months", "days", "hours", "minutes", or "seconds".  Only seconds
    may be fractional.
    """

    units = ('years', 'months', 'days', 'hours', 'minutes', 'seconds')

    pattern = re.compile(
        r'(?:(?P<number>[+-]?\d+(?:\.\d+)?)\s*'
        rf'|(?P<ordinal>{lexical.ordinal_pattern})\s*)?'
        rf'(?P<unit>{lexical.unit_pattern})'
        r'(?:\s+(?P<ago>ago)(?![a-z]))?')
    word_pattern = re.compile(lexical.word_pattern(lexical.relative_words))

    def __init__(self, unit, amount):
        if unit not in Relative.units:
            raise ValueError(f'Not a relative unit: {unit!r}')
        self.unit = unit
        self.amount = amount

    def __repr__(self):
        return f'Relative({self.unit!r}, {self.amount!r})'

    @staticmethod
    def match(text, pos):
        pos = skip_space(text, pos)
        match = Relative.word_pattern.match(text, pos)
        if match is not None:
            unit, amount = lexical.relative_words[match.group(0)]
            return Relative(unit, amount), match.end()
        match = Relative.pattern.match(text, pos)
        if match is None:
            return None
        number, ordinal, word, ago = match.group(
            'number', 'ordinal', 'unit', 'ago')
        unit, multiplier = lexical.relative_units[word]
        if number is not None and '.' in number:
            if unit != 'seconds':
                return None
            amount = float(number)
        elif number is not None:
            amount = int(number)
        elif ordinal is not None:
            amount = lexical.ordinals[ordinal]
        else:
            amount = 1
        amount *= multiplier
        if unit == 'seconds':
            amount = float(amount)
        if ago is not None:
            amount = -amount
        return Relative(unit, amount), match.end()


# Numbers


_epoch_pattern = re.compile(r'@(?P<seconds>[+-]?\d+)')
_year_pattern = re.compile(r'(?P<year>\d{4})(?!\d)')

# Timestamps are 32-bit signed seconds
_min_epoch = -2 ** 31
_max_epoch = 2 ** 31 - 1


def match_epoch(text, pos):
    """
    Match `@<seconds since the epoch>`.  Timestamps outside the 32-bit
    range do not match.
    """
    pos = skip_space(text, pos)
    match = _epoch_pattern.match(text, pos)
    if match is None:
        return None
    seconds = int(match.group('seconds'))
    if not _min_epoch <= seconds <= _max_epoch:
        return None
    return seconds, match.end()


def match_year(text, pos):
    """Match a bare four-digit year."""
    pos = skip_space(text, pos)
    match = _year_pattern.match(text, pos)
    if match is None:
        return None
    return int(match.group('year')), match.end()
