"""
Lexical building blocks shared by the fragment parsers: skipping
whitespace and comments, and the tables of words that name months,
weekdays, ordinals, relative units, and time zones.

All tables hold lowercase words only.  The grammar is case sensitive and
callers lowercase their input before parsing (see `gnudate.__init__`).
"""


# Copyright (c) 2020 Aubrey Barnard.
#
# This is free software released under the MIT License
# (https://choosealicense.com/licenses/mit/).


import re


# Configuration

# Two-digit years at or above the pivot are in the 1900s, the rest are
# in the 2000s
TWO_DIGIT_YEAR_PIVOT = 69


# Whitespace and comments

# Any sequence of Unicode whitespace, including newlines
_whitespace_pattern = re.compile(r'\s+')


def _skip_comment(text, pos):
    # Returns the index after a balanced parenthesized comment starting
    # at `pos`, or `pos` itself if the parentheses are unbalanced
    depth = 0
    idx = pos
    while idx < len(text):
        char = text[idx]
        if char == '(':
            depth += 1
        elif char == ')':
            depth -= 1
            if depth == 0:
                return idx + 1
        idx += 1
    return pos


def skip_space(text, pos):
    """
    Return the index of the first character at or after `pos` that is
    neither whitespace nor part of a parenthesized comment.
    """
    while pos < len(text):
        match = _whitespace_pattern.match(text, pos)
        if match is not None:
            pos = match.end()
        elif text[pos] == '(':
            end = _skip_comment(text, pos)
            if end == pos:
                break
            pos = end
        else:
            break
    return pos


def expand_year(digits):
    """Interpret a string of year digits, widening two-digit years."""
    year = int(digits)
    if len(digits) == 2:
        year += 1900 if year >= TWO_DIGIT_YEAR_PIVOT else 2000
    return year


# Word tables

months = {
    'january': 1, 'jan': 1,
    'february': 2, 'feb': 2,
    'march': 3, 'mar': 3,
    'april': 4, 'apr': 4,
    'may': 5,
    'june': 6, 'jun': 6,
    'july': 7, 'jul': 7,
    'august': 8, 'aug': 8,
    'september': 9, 'sept': 9, 'sep': 9,
    'october': 10, 'oct': 10,
    'november': 11, 'nov': 11,
    'december': 12, 'dec': 12,
}

# Numbered from Monday = 0, like `datetime.date.weekday`
weekdays = {
    'monday': 0, 'mon': 0,
    'tuesday': 1, 'tues': 1, 'tue': 1,
    'wednesday': 2, 'wednes': 2, 'wed': 2,
    'thursday': 3, 'thurs': 3, 'thur': 3, 'thu': 3,
    'friday': 4, 'fri': 4,
    'saturday': 5, 'sat': 5,
    'sunday': 6, 'sun': 6,
}

# No "second": that word is the unit
ordinals = {
    'last': -1,
    'this': 0,
    'next': 1,
    'first': 1,
    'third': 3,
    'fourth': 4,
    'fifth': 5,
    'sixth': 6,
    'seventh': 7,
    'eighth': 8,
    'ninth': 9,
    'tenth': 10,
    'eleventh': 11,
    'twelfth': 12,
}

# Unit word -> (unit name, multiplier).  Weeks and fortnights are
# counted in days.
relative_units = {
    'year': ('years', 1),
    'month': ('months', 1),
    'fortnight': ('days', 14),
    'week': ('days', 7),
    'day': ('days', 1),
    'hour': ('hours', 1),
    'minute': ('minutes', 1),
    'min': ('minutes', 1),
    'second': ('seconds', 1),
    'sec': ('seconds', 1),
}
relative_units.update({
    word + 's': unit for (word, unit) in list(relative_units.items())})

# Words that stand for a whole relative item
relative_words = {
    'yesterday': ('days', -1),
    'tomorrow': ('days', 1),
    'today': ('days', 0),
    'now': ('days', 0),
}

_hour = 3600

# Time zone abbreviations and their offsets east of UTC in seconds,
# following GNU parse-datetime
zone_abbreviations = {
    'gmt': 0,
    'ut': 0,
    'utc': 0,
    'wet': 0,
    'west': 1 * _hour,
    'bst': 1 * _hour,
    'art': -3 * _hour,
    'brt': -3 * _hour,
    'brst': -2 * _hour,
    'nst': -(3 * _hour + 1800),
    'ndt': -(2 * _hour + 1800),
    'ast': -4 * _hour,
    'adt': -3 * _hour,
    'clt': -4 * _hour,
    'clst': -3 * _hour,
    'est': -5 * _hour,
    'edt': -4 * _hour,
    'cst': -6 * _hour,
    'cdt': -5 * _hour,
    'mst': -7 * _hour,
    'mdt': -6 * _hour,
    'pst': -8 * _hour,
    'pdt': -7 * _hour,
    'akst': -9 * _hour,
    'akdt': -8 * _hour,
    'hst': -10 * _hour,
    'hast': -10 * _hour,
    'hadt': -9 * _hour,
    'sst': -12 * _hour,
    'wat': 1 * _hour,
    'cet': 1 * _hour,
    'cest': 2 * _hour,
    'met': 1 * _hour,
    'mez': 1 * _hour,
    'mest': 2 * _hour,
    'mesz': 2 * _hour,
    'eet': 2 * _hour,
    'eest': 3 * _hour,
    'cat': 2 * _hour,
    'sast': 2 * _hour,
    'eat': 3 * _hour,
    'msk': 3 * _hour,
    'msd': 4 * _hour,
    'ist': 5 * _hour + 1800,
    'sgt': 8 * _hour,
    'kst': 9 * _hour,
    'jst': 9 * _hour,
    'gst': 10 * _hour,
    'nzst': 12 * _hour,
    'nzdt': 13 * _hour,
}

# Military zones: A-I are +1 to +9, K-M are +10 to +12, N-Y are -1 to
# -12, and Z is UTC.  There is no J.
military_zones = {'z': 0}
military_zones.update(
    (letter, (idx + 1) * _hour) for (idx, letter) in enumerate('abcdefghi'))
military_zones.update(
    (letter, (idx + 10) * _hour) for (idx, letter) in enumerate('klm'))
military_zones.update(
    (letter, -(idx + 1) * _hour)
    for (idx, letter) in enumerate('nopqrstuvwxy'))

zones = dict(zone_abbreviations)
zones.update(military_zones)


# Patterns

def word_pattern(words):
    """
    Return a regular expression source that matches any of the given
    words as a whole word.

    Longer words are tried first so that, for example, "thurs" is not
    read as "thu" followed by "rs".
    """
    alternatives = sorted(words, key=lambda w: (-len(w), w))
    return ('(?:' + '|'.join(re.escape(w) for w in alternatives)
            + ')(?![a-z])')


month_pattern = word_pattern(months)
weekday_pattern = word_pattern(weekdays)
ordinal_pattern = word_pattern(ordinals)
unit_pattern = word_pattern(relative_units)

_unit_ahead_pattern = re.compile(unit_pattern)


def unit_follows(text, pos):
    """Whether a relative unit word comes next after optional space."""
    return _unit_ahead_pattern.match(text, skip_space(text, pos)) is not None
