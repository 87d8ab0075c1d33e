# Copyright (c) 2020-2025 NASK. All rights reserved.

"""
This module contains several regular expression objects (used in other
parts of the *normalizer* library).
"""


import re


#: Integer number as text (optional sign, decimal digits only).
#:
#: Used by :class:`normalizer.schema.fields.NumberField`.
INTEGER_TEXT_REGEX = re.compile(r'\A[+\-]?\d+\Z', re.ASCII)


#: Floating-point number as text (optional sign, digits on both sides
#: of the decimal point, optional exponent).
#:
#: Used by :class:`normalizer.schema.fields.NumberField`.
FLOAT_TEXT_REGEX = re.compile(r'''
    \A
    [+\-]?
    \d+
    \.
    \d+
    (?:
        [eE]
        [+\-]?
        \d+
    )?
    \Z
''', re.ASCII | re.VERBOSE)


ISO_DATE_REGEX = re.compile(
    # here we don't check ranges of particular values (e.g. that month is
    # in 01..12) because it is better to do it in functions that use this
    # regex (-> better debug information in case of incorrect input data)

    r'''
    \A
    (?P<year>
        \d{4}
    )
    -
    (?P<month>
        \d{2}
    )
    -
    (?P<day>
        \d{2}
    )
    \Z
    ''', re.ASCII | re.VERBOSE)


ISO_TIME_REGEX = re.compile(
    # here we don't check ranges of particular values (e.g. that minute is
    # in 00..59) because it is better to do it in functions that use this
    # regex (-> better debug information in case of incorrect input data)

    r'''
    \A
    (?P<hour>
        \d{2}
    )
    :
    (?P<minute>
        \d{2}
    )
    :
    (?P<second>
        \d{2}
    )
    (?:
        \.
        (?P<secondfraction>
            \d+
        )
    )?
    (?P<tz>
        Z
    |
        (?P<tzsign>
            [+\-]
        )
        (?P<tzhour>
            \d{2}
        )
        (?:
            :?
            (?P<tzminute>
                \d{2}
            )
        )?
    )?
    \Z
    ''', re.ASCII | re.VERBOSE)


ISO_DATETIME_REGEX = re.compile(
    r'{date}[T ]{time}'.format(date=ISO_DATE_REGEX.pattern.rstrip('Z\\ \r\n'),
                               time=ISO_TIME_REGEX.pattern.lstrip('A\\ \r\n')),
    re.ASCII | re.VERBOSE)
