"""Errors raised while parsing and resolving date strings."""


# Copyright (c) 2020 Aubrey Barnard.
#
# This is free software released under the MIT License
# (https://choosealicense.com/licenses/mit/).


class DateTimeError(Exception):
    pass


class ParseError(DateTimeError):
    """
    The input could not be read as a sequence of date items.

    Raised for committed ("cut") failures only: malformed input that no
    other alternative may try, conflicting items, and trailing input
    that is not an item.  `text` is the input that was left unconsumed
    and `column` is its 1-based position.
    """

    def __init__(
            self,
            column=None,
            text=None,
            message=None,
    ):
        self.column = column
        self.text = text
        self.message = message

    def __str__(self):
        pieces = ['Parse error']
        if self.column is not None:
            pieces.append(f' at column {self.column}')
        if self.message is not None:
            pieces.append(': ')
            pieces.append(self.message)
        if self.text is not None:
            pieces.append(': ')
            pieces.append(f'{self.text!r}')
        return ''.join(pieces)

    @classmethod
    def at(cls, text, pos, message):
        return cls(pos + 1, text[pos:], message)


class InvalidInputError(DateTimeError):
    """The items were read but do not denote a representable instant."""

    def __init__(self, message='invalid input'):
        super().__init__(message)
        self.message = message
