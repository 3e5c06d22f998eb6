"""
Resolving accumulated date items into an absolute instant.

Resolution starts at midnight of the base instant and applies, in this
order: the epoch timestamp, the calendar date, the time of day, the
weekday, the relative items, and finally the time zone.  The steps
reproduce GNU `date` including its quirks:

* "next X" means the coming X unless today is X.
* A month is as many days as the month the instant is in at that point.
* Relative items with no timestamp, date, time, or weekday are measured
  from the base instant itself, not from its midnight, and every
  relative item restarts from the base instant.
* Fractional relative seconds are truncated.
* A time zone item relabels the wall clock time rather than converting
  the instant.

Every intermediate value is a `datetime` with a fixed offset.  Any out
of range calendar value or arithmetic overflow fails the whole
resolution with `InvalidInputError`.
"""


# Copyright (c) 2020 Aubrey Barnard.
#
# This is free software released under the MIT License
# (https://choosealicense.com/licenses/mit/).


import calendar
import datetime
import logging

from dateutil import tz

from .errors import InvalidInputError


_logger = logging.getLogger(__name__)

_max_microsecond = 999_999


def fixed_offset(instant):
    """
    Return `instant` with its time zone replaced by the fixed offset
    the zone has at that instant.  Naive instants are taken as local
    time.
    """
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=tz.tzlocal())
    return instant.replace(
        tzinfo=datetime.timezone(instant.utcoffset()))


def now():
    return fixed_offset(datetime.datetime.now(tz.tzlocal()))


def _days_in_month(instant):
    return calendar.monthrange(instant.year, instant.month)[1]


def _microseconds(second):
    fraction = second - int(second)
    return min(round(fraction * 1_000_000), _max_microsecond)


def _apply_weekday(instant, weekday, has_time):
    if not has_time:
        instant = instant.replace(hour=0, minute=0, second=0, microsecond=0)
    offset = weekday.offset
    current = instant.weekday()
    # Assuming today is Monday, next Friday is this Friday but next
    # Monday is a week away
    if current != weekday.day and offset > 0:
        offset -= 1
    delta = (weekday.day - current) % 7 + offset * 7
    return instant + datetime.timedelta(days=delta)


def _apply_relative(instant, relative):
    unit, amount = relative.unit, relative.amount
    if unit == 'years':
        return instant.replace(year=instant.year + amount)
    elif unit == 'months':
        return instant + datetime.timedelta(
            days=_days_in_month(instant) * amount)
    elif unit == 'days':
        return instant + datetime.timedelta(days=amount)
    elif unit == 'hours':
        return instant + datetime.timedelta(hours=amount)
    elif unit == 'minutes':
        return instant + datetime.timedelta(minutes=amount)
    elif unit == 'seconds':
        return instant + datetime.timedelta(seconds=int(amount))
    raise ValueError(f'Not a relative unit: {unit!r}')


def _resolve(builder, base):
    instant = datetime.datetime(
        base.year, base.month, base.day, tzinfo=base.tzinfo)
    _logger.debug('Anchor: %s', instant)

    if builder.timestamp is not None:
        instant = datetime.datetime.fromtimestamp(
            builder.timestamp, datetime.timezone.utc).astimezone(
                instant.tzinfo)
        _logger.debug('After timestamp: %s', instant)

    if builder.date is not None:
        date = builder.date
        year = date.year if date.year is not None else instant.year
        instant = instant.replace(year=year, month=date.month, day=date.day)
        _logger.debug('After date: %s', instant)

    if builder.time is not None:
        time = builder.time
        tzinfo = (time.offset.tzinfo() if time.offset is not None
                  else instant.tzinfo)
        instant = instant.replace(
            hour=time.hour,
            minute=time.minute,
            second=int(time.second),
            microsecond=_microseconds(time.second),
            tzinfo=tzinfo,
        )
        _logger.debug('After time: %s', instant)

    if builder.weekday is not None:
        instant = _apply_weekday(
            instant, builder.weekday, builder.time is not None)
        _logger.debug('After weekday: %s', instant)

    for relative in builder.relative:
        # Restarts from the base before every relative item, so without
        # an anchor only the last relative item counts
        if not builder.has_anchor():
            instant = base
        instant = _apply_relative(instant, relative)
        _logger.debug('After %r: %s', relative, instant)

    if builder.timezone is not None:
        instant = instant.replace(tzinfo=builder.timezone.tzinfo())
        _logger.debug('After relabeling: %s', instant)

    return instant


def resolve(builder, base=None):
    """
    Resolve the items accumulated in `builder` into an aware `datetime`
    with a fixed offset.

    `base` is the instant that relative items are measured from and that
    supplies any missing fields.  It defaults to the current local time.
    Raises `InvalidInputError` if the items do not denote a
    representable instant.
    """
    base = now() if base is None else fixed_offset(base)
    try:
        return _resolve(builder, base)
    except (ValueError, OverflowError, OSError) as error:
        _logger.debug('Resolution failed: %s', error)
        raise InvalidInputError() from error
