# Copyright (c) 2020-2025 NASK. All rights reserved.

import datetime

from normalizer.regexes import (
    ISO_DATE_REGEX,
    ISO_DATETIME_REGEX,
)


class ISOParseError(ValueError):

    """
    Raised by the parsing functions of this module for invalid input.

    The :attr:`reason` attribute is one of the short identifiers:
    ``'invalid_format'``, ``'invalid_date'``, ``'invalid_time'``,
    ``'missing_offset'`` (the last one only for combined date and
    time).

    >>> exc = ISOParseError('missing_offset', 'no UTC offset in {!a}'.format('x'))
    >>> exc.reason
    'missing_offset'
    >>> str(exc)
    "no UTC offset in 'x'"
    """

    def __init__(self, reason, *args):
        self.reason = reason
        super(ISOParseError, self).__init__(*args or (reason,))


def datetime_utc_normalize(dt):
    """
    Normalize a timezone-aware :class:`datetime.datetime` to UTC.

    Args:
        `dt`: A timezone-aware :class:`datetime.datetime` instance.

    Returns:
        A pair: (an equivalent :class:`datetime.datetime` instance
        whose `tzinfo` is :attr:`datetime.timezone.utc`, the UTC offset
        of `dt` as an :class:`int` number of seconds).

    Raises:
        :exc:`ISOParseError` (with the reason ``'missing_offset'``)
        if `dt` is a *naive* datetime.

    >>> tz = datetime.timezone(datetime.timedelta(hours=2))
    >>> datetime_utc_normalize(datetime.datetime(2013, 6, 6, 14, 13, 57, tzinfo=tz))
    (datetime.datetime(2013, 6, 6, 12, 13, 57, tzinfo=datetime.timezone.utc), 7200)

    >>> datetime_utc_normalize(datetime.datetime(2013, 6, 6, 14, 13, 57))
    ... # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ISOParseError: ...
    """
    offset = dt.utcoffset()
    if offset is None:
        raise ISOParseError('missing_offset',
                            '{!a} is a naive datetime'.format(dt))
    return (dt.astimezone(datetime.timezone.utc),
            int(offset.total_seconds()))


def parse_iso_date(s):
    """
    Parse *ISO-8601*-formatted calendar date (``YYYY-MM-DD``).

    Args:
        `s`: *ISO-8601*-formatted date as a `str`.

    Returns:
        A :class:`datetime.date` instance.

    Raises:
        :exc:`ISOParseError` for invalid input (with the reason
        being ``'invalid_format'`` or ``'invalid_date'``).

    >>> parse_iso_date('2013-06-12')
    datetime.date(2013, 6, 12)

    >>> parse_iso_date('2013-02-31')
    ... # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ISOParseError: ...
    >>> parse_iso_date('2013-06-12T12:00:00Z')
    ... # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ISOParseError: ...
    """
    match = ISO_DATE_REGEX.match(s)
    if match is None:
        raise ISOParseError('invalid_format',
                            'could not parse {!a} as ISO date'.format(s))
    return _make_date_from_match(match)


def parse_iso_datetime_with_offset(s):
    """
    Parse *ISO-8601*-formatted combined date and time that includes an
    explicit UTC offset, and normalize it to UTC.

    Args:
        `s`: *ISO-8601*-formatted combined date and time -- as a `str`.

    Returns:
        A pair: (a timezone-aware :class:`datetime.datetime` instance,
        normalized to UTC; the UTC offset specified in the input, as an
        :class:`int` number of seconds).

    Raises:
        :exc:`ISOParseError` for invalid input (with the reason being
        one of: ``'invalid_format'``, ``'invalid_date'``,
        ``'invalid_time'``, ``'missing_offset'``).

    The offset can be specified as ``Z``, ``+HH:MM``, ``+HHMM`` or
    ``+HH`` (or with ``-`` instead of ``+``; note that ``-00:00``, which
    denotes an *unknown* offset, is not accepted).  The fractional part
    of seconds, if specified with more than 6 digits, is truncated to
    microseconds.

    >>> parse_iso_datetime_with_offset('2020-12-30T12:00:00+0100')
    (datetime.datetime(2020, 12, 30, 11, 0, tzinfo=datetime.timezone.utc), 3600)

    >>> parse_iso_datetime_with_offset('2020-12-30 12:00:00.1234567Z')
    (datetime.datetime(2020, 12, 30, 12, 0, 0, 123456, tzinfo=datetime.timezone.utc), 0)

    >>> parse_iso_datetime_with_offset('2013-06-13T22:02:04-07:00')
    (datetime.datetime(2013, 6, 14, 5, 2, 4, tzinfo=datetime.timezone.utc), -25200)

    >>> parse_iso_datetime_with_offset('2020-12-30T12:00:00')
    ... # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ISOParseError: ...
    """
    match = ISO_DATETIME_REGEX.match(s)
    if match is None:
        raise ISOParseError('invalid_format',
                            'could not parse {!a} as ISO combined '
                            'date + time'.format(s))
    if match.group('tz') and match.group('tzsign') == '-' and not (
          int(match.group('tzhour')) or int(match.group('tzminute') or 0)):
        raise ISOParseError('invalid_format',
                            'the "-00:00" UTC offset (in {!a}) denotes '
                            'an unknown local offset'.format(s))
    d = _make_date_from_match(match)
    t = _make_time_from_match(match)
    if t.tzinfo is None:
        raise ISOParseError('missing_offset',
                            'no UTC offset in {!a}'.format(s))
    return datetime_utc_normalize(datetime.datetime.combine(d, t))


def _make_date_from_match(match):
    g = match.groupdict()
    try:
        return datetime.date(int(g['year']),
                             int(g['month']),
                             int(g['day']))
    except ValueError as exc:
        raise ISOParseError('invalid_date', str(exc)) from None


def _make_time_from_match(match):
    g = match.groupdict()
    if g['secondfraction']:
        # (fraction digits beyond microseconds are truncated)
        microsecond = int(g['secondfraction'][:6].ljust(6, '0'))
    else:
        microsecond = 0
    if g['tz'] == 'Z':
        tzinfo = datetime.timezone.utc
    elif g['tz']:
        tzhour = int(g['tzhour'])
        tzminute = int(g['tzminute'] or 0)
        if tzhour > 23 or tzminute > 59:
            raise ISOParseError('invalid_format',
                                'UTC offset {!a} is out of range'.format(g['tz']))
        utc_offset = datetime.timedelta(hours=tzhour, minutes=tzminute)
        if g['tzsign'] == '-':
            utc_offset = -utc_offset
        tzinfo = datetime.timezone(utc_offset)
    else:
        tzinfo = None
    try:
        return datetime.time(int(g['hour']),
                             int(g['minute']),
                             int(g['second']),
                             microsecond,
                             tzinfo)
    except ValueError as exc:
        raise ISOParseError('invalid_time', str(exc)) from None
