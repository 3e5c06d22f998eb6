"""Tests fragment parsers."""


# Copyright (c) 2020 Aubrey Barnard.
#
# This is free software released under the MIT License
# (https://choosealicense.com/licenses/mit/).


import unittest

from .. import fragments as frg
from ..fragments import Date, DateTime, Offset, Relative, Time, Weekday


class FragmentTestCase(unittest.TestCase):

    # Subclasses set these.  Matches are (text, fragment) or (text,
    # fragment, length) where length defaults to the whole text.
    parser = None
    matches = ()
    non_matches = ()

    def test_matches(self):
        if self.parser is None:
            return
        for match in self.matches:
            if len(match) == 2:
                text, fragment = match
                length = len(text)
            else:
                text, fragment, length = match
            with self.subTest(repr(text)):
                self.assertEqual(type(self).parser(text, 0),
                                 (fragment, length))

    def test_non_matches(self):
        if self.parser is None:
            return
        for text in self.non_matches:
            with self.subTest(repr(text)):
                self.assertIsNone(type(self).parser(text, 0))


class DateTest(FragmentTestCase):

    parser = Date.match

    matches = (
        # ISO
        ('2022-11-14', Date(14, 11, 2022)),
        ('22-11-14', Date(14, 11, 2022)),
        ('70-01-02', Date(2, 1, 1970)),
        ('2022-1-5', Date(5, 1, 2022)),
        # Not validated until resolution
        ('2025-13-40', Date(40, 13, 2025)),
        # US
        ('11/14/2022', Date(14, 11, 2022)),
        ('11/14/22', Date(14, 11, 2022)),
        ('11/14', Date(14, 11)),
        # Day first
        ('14 november 2022', Date(14, 11, 2022)),
        ('14 nov 2022', Date(14, 11, 2022)),
        ('14-nov-2022', Date(14, 11, 2022)),
        ('14nov2022', Date(14, 11, 2022)),
        ('1 may', Date(1, 5)),
        # Month first
        ('november 14, 2022', Date(14, 11, 2022)),
        ('nov 14 2022', Date(14, 11, 2022)),
        ('jul 16', Date(16, 7)),
        ('sept. 3', Date(3, 9)),
        ('sep 3', Date(3, 9)),
        # Leading whitespace is skipped
        ('  2022-11-14', Date(14, 11, 2022)),
        # A following time keeps its hour
        ('jul 18 06:14:49', Date(18, 7), 6),
        ('18 jul 06:14:49', Date(18, 7), 6),
        ('jul 18, 2024 06:14:49', Date(18, 7, 2024), 12),
        ('2024-07-18 06:14:49', Date(18, 7, 2024), 10),
        # A following ISO date keeps its year
        ('jul 16 2024-05-20', Date(16, 7), 6),
    )

    non_matches = (
        '',
        'thu',
        '2 days',
        '06:14',
        '2024',
        '@123',
        'jul 2024',
        'july',
        '+05:00',
    )


class TimeTest(FragmentTestCase):

    parser = Time.match

    matches = (
        ('06:14', Time(6, 14)),
        ('06:14:49', Time(6, 14, 49.0)),
        ('6:14:49', Time(6, 14, 49.0)),
        ('06:14:49.567', Time(6, 14, 49.567)),
        ('06:14:49,567', Time(6, 14, 49.567)),
        # 12-hour clock
        ('10am', Time(10, 0)),
        ('10 am', Time(10, 0)),
        ('12am', Time(0, 0)),
        ('12pm', Time(12, 0)),
        ('7 p.m.', Time(19, 0)),
        ('7:30pm', Time(19, 30)),
        ('12:30 a.m.', Time(0, 30)),
        # Embedded offsets
        ('10:00 +05:30', Time(10, 0, 0.0, Offset(19800))),
        ('10:00-0800', Time(10, 0, 0.0, Offset(-28800))),
        ('10:00 est', Time(10, 0, 0.0, Offset(-18000))),
        ('10:00z', Time(10, 0, 0.0, Offset(0))),
        ('10pm utc+1', Time(22, 0, 0.0, Offset(3600))),
        # Not offsets
        ('06:14:49 2024', Time(6, 14, 49.0), 8),
        ('10:00 +1 day', Time(10, 0), 5),
        ('10:00 thu', Time(10, 0), 5),
    )

    non_matches = (
        '',
        '13pm',
        '0am',
        '2 days',
        '2024',
        '1:2',
        'noon',
        '2022-11-14',
    )


class OffsetTest(FragmentTestCase):

    parser = Offset.match

    matches = (
        ('+05:30', Offset(19800)),
        ('+0530', Offset(19800)),
        ('-0800', Offset(-28800)),
        ('+5', Offset(18000)),
        ('-03', Offset(-10800)),
        ('utc', Offset(0)),
        ('gmt', Offset(0)),
        ('brt', Offset(-10800)),
        ('ist', Offset(19800)),
        ('utc+8', Offset(28800)),
        ('utc +8', Offset(28800)),
        ('est-1', Offset(-21600)),
        ('m1', Offset(46800)),
        ('z', Offset(0)),
        ('m1y', Offset(46800), 2),
        ('utc +2 days', Offset(0), 3),
    )

    non_matches = (
        '',
        'abcdef',
        'wed',
        'j',
        '2024',
        '+12345',
        '+1 day',
    )

    def test_tzinfo(self):
        self.assertEqual(
            Offset(-10800).tzinfo().utcoffset(None).total_seconds(),
            -10800)
        with self.assertRaises(ValueError):
            Offset(24 * 3600).tzinfo()


class DateTimeTest(FragmentTestCase):

    parser = DateTime.match

    matches = (
        ('2024-05-20 06:14:49',
         DateTime(Date(20, 5, 2024), Time(6, 14, 49.0))),
        ('2024-05-20t06:14:49',
         DateTime(Date(20, 5, 2024), Time(6, 14, 49.0))),
        ('2024-05-20t06:14:49+02:00',
         DateTime(Date(20, 5, 2024), Time(6, 14, 49.0, Offset(7200)))),
        ('2024-05-20 10am',
         DateTime(Date(20, 5, 2024), Time(10, 0))),
    )

    non_matches = (
        '2024-05-20',
        '2024-05-20 ',
        '2005-01-01 +1 day',
        '2025-05-19 2024-05-20 06:14:49',
        '2025-05-19 2024',
        '11/14/2022 10:00',
        '06:14:49',
    )


class WeekdayTest(FragmentTestCase):

    parser = Weekday.match

    matches = (
        ('wed', Weekday(0, 2)),
        ('wednesday', Weekday(0, 2)),
        ('mon', Weekday(0, 0)),
        ('sunday', Weekday(0, 6)),
        ('tues.', Weekday(0, 1)),
        ('thurs', Weekday(0, 3)),
        ('next thu', Weekday(1, 3)),
        ('last wed', Weekday(-1, 2)),
        ('this fri', Weekday(0, 4)),
        ('third fri', Weekday(3, 4)),
        ('2 thu', Weekday(2, 3)),
        ('-1 sat', Weekday(-1, 5)),
        ('thursday,', Weekday(0, 3)),
        ('thu, jul 18', Weekday(0, 3), 4),
    )

    non_matches = (
        '',
        'week',
        'thumb',
        'next',
        'second thu',
        '2 days',
    )


class RelativeTest(FragmentTestCase):

    parser = Relative.match

    matches = (
        ('2 days ago', Relative('days', -2)),
        ('+1 day', Relative('days', 1)),
        ('-2 hours', Relative('hours', -2)),
        ('day', Relative('days', 1)),
        ('3 weeks', Relative('days', 21)),
        ('3weeks', Relative('days', 21)),
        ('fortnight', Relative('days', 14)),
        ('last year', Relative('years', -1)),
        ('next month', Relative('months', 1)),
        ('this minute', Relative('minutes', 0)),
        ('third hour', Relative('hours', 3)),
        ('-30 min', Relative('minutes', -30)),
        ('1.5 seconds', Relative('seconds', 1.5)),
        ('10 secs', Relative('seconds', 10.0)),
        ('second', Relative('seconds', 1.0)),
        ('1 week ago', Relative('days', -7)),
        ('yesterday', Relative('days', -1)),
        ('tomorrow', Relative('days', 1)),
        ('today', Relative('days', 0)),
        ('now', Relative('days', 0)),
        ('2 days agony', Relative('days', 2), 6),
    )

    non_matches = (
        '',
        '1.5 days',
        'next thu',
        '2 thu',
        'dayz',
        'ago',
        '2',
    )

    def test_seconds_are_floats(self):
        relative, _ = Relative.match('3 seconds', 0)
        self.assertIsInstance(relative.amount, float)
        relative, _ = Relative.match('3 minutes', 0)
        self.assertIsInstance(relative.amount, int)

    def test_bad_unit(self):
        with self.assertRaises(ValueError):
            Relative('weeks', 1)


class NumberTest(unittest.TestCase):

    def test_epoch(self):
        self.assertEqual(frg.match_epoch('@1690466034', 0),
                         (1690466034, 11))
        self.assertEqual(frg.match_epoch(' @-1', 0), (-1, 4))
        self.assertIsNone(frg.match_epoch('1690466034', 0))
        self.assertIsNone(frg.match_epoch('@', 0))

    def test_epoch_range(self):
        self.assertEqual(frg.match_epoch('@2147483647', 0),
                         (2147483647, 11))
        self.assertEqual(frg.match_epoch('@-2147483648', 0),
                         (-2147483648, 12))
        for text in ('@2147483648', '@-2147483649', '@99999999999999999999'):
            with self.subTest(text):
                self.assertIsNone(frg.match_epoch(text, 0))

    def test_year(self):
        self.assertEqual(frg.match_year('2024', 0), (2024, 4))
        self.assertEqual(frg.match_year(' 2024 ', 0), (2024, 5))
        self.assertIsNone(frg.match_year('20245', 0))
        self.assertIsNone(frg.match_year('202', 0))
        self.assertIsNone(frg.match_year('year', 0))
