"""
Recognizing date items and accumulating them into a builder.

A date string is a sequence of items in any order: calendar dates,
times of day, combined dates and times, weekdays, relative shifts, epoch
timestamps, time zones, and bare years.  `ItemDispatcher` recognizes one
item at a time by trying each fragment parser in a fixed priority order.
`DateTimeBuilder` accumulates the items, rejecting items that conflict
with ones already seen.  The result is resolved into an instant by
`gnudate.resolve`.
"""


# Copyright (c) 2020 Aubrey Barnard.
#
# This is free software released under the MIT License
# (https://choosealicense.com/licenses/mit/).


from enum import Enum
import logging

from . import fragments
from .errors import ParseError
from .lexical import skip_space


_logger = logging.getLogger(__name__)


# Items


class ItemKind(Enum):
    timestamp = 'timestamp'
    year = 'year'
    date_time = 'date_time'
    date = 'date'
    time = 'time'
    weekday = 'weekday'
    relative = 'relative'
    timezone = 'timezone'


class Item:

    def __init__(self, kind, value):
        self.kind = kind
        self.value = value

    def __eq__(self, other):
        return self.__dict__ == other.__dict__

    def __repr__(self):
        return f'Item({self.kind!r}, {self.value!r})'


class ItemDispatcher:
    """
    Ordered choice between item parsers.  The first parser that matches
    wins.

    Parsers have the signature `parser(text, pos)` and return either
    `(value, end)` or `None`.  A parser that raises `ParseError` has
    committed to its reading and the error propagates without trying
    the remaining parsers.
    """

    def __init__(self, *kind_parser_pairs):
        self._parsers = list(kind_parser_pairs)

    def match(self, text, pos):
        for kind, parser in self._parsers:
            result = parser(text, pos)
            if result is not None:
                value, end = result
                return Item(kind, value), end
        return None


_dispatcher = ItemDispatcher(
    (ItemKind.date_time, fragments.DateTime.match),
    (ItemKind.date, fragments.Date.match),
    (ItemKind.time, fragments.Time.match),
    (ItemKind.relative, fragments.Relative.match),
    (ItemKind.weekday, fragments.Weekday.match),
    (ItemKind.timestamp, fragments.match_epoch),
    (ItemKind.timezone, fragments.Offset.match),
    (ItemKind.year, fragments.match_year),
)


def match_item(text, pos):
    return _dispatcher.match(text, pos)


# Accumulation


class ConflictError(ParseError):
    pass


class DateTimeBuilder:
    """
    The items of a date string, not yet resolved into an instant.

    Builders are values: every `with_*` method returns a new builder and
    leaves the original unchanged.  At most one timestamp, date, time,
    weekday, and time zone may be set.  Relative items accumulate in the
    order they were read, which matters when they are applied.
    """

    def __init__(
            self,
            timestamp=None,
            date=None,
            time=None,
            weekday=None,
            timezone=None,
            relative=(),
    ):
        self.timestamp = timestamp
        self.date = date
        self.time = time
        self.weekday = weekday
        self.timezone = timezone
        self.relative = tuple(relative)

    def __eq__(self, other):
        return self.__dict__ == other.__dict__

    def __repr__(self):
        return (f'DateTimeBuilder(timestamp={self.timestamp!r}, '
                f'date={self.date!r}, time={self.time!r}, '
                f'weekday={self.weekday!r}, timezone={self.timezone!r}, '
                f'relative={self.relative!r})')

    def _updated(self, **changes):
        fields = dict(self.__dict__)
        fields.update(changes)
        return DateTimeBuilder(**fields)

    def has_anchor(self):
        """Whether any item fixes a point in time rather than a shift."""
        return (self.timestamp is not None
                or self.date is not None
                or self.time is not None
                or self.weekday is not None)

    def with_timestamp(self, timestamp):
        if self.timestamp is not None:
            raise ConflictError(
                message='timestamp cannot appear more than once')
        return self._updated(timestamp=timestamp)

    def with_year(self, year):
        # A bare year fills in a date without one, otherwise it means
        # January 1 of that year
        if self.date is not None and self.date.year is not None:
            raise ConflictError(message='year cannot appear more than once')
        if self.date is not None:
            date = fragments.Date(self.date.day, self.date.month, year)
        else:
            date = fragments.Date(1, 1, year)
        return self._updated(date=date)

    def with_date_time(self, date_time):
        if self.date is not None or self.time is not None:
            raise ConflictError(
                message='date or time cannot appear more than once')
        return self.with_date(date_time.date).with_time(date_time.time)

    def with_date(self, date):
        if self.date is not None:
            raise ConflictError(message='date cannot appear more than once')
        return self._updated(date=date)

    def with_time(self, time):
        if self.time is not None:
            raise ConflictError(message='time cannot appear more than once')
        if self.timezone is not None and time.offset is not None:
            raise ConflictError(
                message='timezone cannot appear more than once')
        return self._updated(time=time)

    def with_weekday(self, weekday):
        if self.weekday is not None:
            raise ConflictError(
                message='weekday cannot appear more than once')
        return self._updated(weekday=weekday)

    def with_timezone(self, timezone):
        if (self.timezone is not None
                or (self.time is not None and self.time.offset is not None)):
            raise ConflictError(
                message='timezone cannot appear more than once')
        return self._updated(timezone=timezone)

    def with_relative(self, relative):
        return self._updated(relative=self.relative + (relative,))

    def with_item(self, item):
        return _item_adders[item.kind](self, item.value)


_item_adders = {
    ItemKind.timestamp: DateTimeBuilder.with_timestamp,
    ItemKind.year: DateTimeBuilder.with_year,
    ItemKind.date_time: DateTimeBuilder.with_date_time,
    ItemKind.date: DateTimeBuilder.with_date,
    ItemKind.time: DateTimeBuilder.with_time,
    ItemKind.weekday: DateTimeBuilder.with_weekday,
    ItemKind.timezone: DateTimeBuilder.with_timezone,
    ItemKind.relative: DateTimeBuilder.with_relative,
}


# Parsing


def items(text, pos=0):
    """
    Generate the items in `text` starting at `pos` as `(item, end)`
    pairs, stopping at the first position where no item is recognized.
    """
    while True:
        result = match_item(text, pos)
        if result is None:
            return
        item, pos = result
        yield item, pos


def parse(text, pos=0, builder=None):
    """
    Read the items of `text` starting at `pos` into a builder.

    Raises `ParseError` when an item conflicts with an earlier one or
    when something other than whitespace follows the last item.
    """
    if builder is None:
        builder = DateTimeBuilder()
    for item, end in items(text, pos):
        _logger.debug('Item at %d: %r', pos, item)
        try:
            builder = builder.with_item(item)
        except ConflictError as error:
            error.column = end + 1
            error.text = text[end:]
            _logger.debug('Conflicting item: %s', error)
            raise
        pos = end
    pos = skip_space(text, pos)
    if pos < len(text):
        raise ParseError.at(text, pos, 'unexpected input')
    return builder
