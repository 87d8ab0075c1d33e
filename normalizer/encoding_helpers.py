# Copyright (c) 2020-2025 NASK. All rights reserved.


def ascii_str(obj):

    r"""
    Safely convert the given object to an ASCII-only :class:`str`.

    This function does its best to obtain a string representation
    (possibly :class:`str`-like or :class:`bytes`-like converted to str,
    though :func:`repr` can also be used as the last-resort fallback)
    and then escaping any non-ASCII characters -- *not raising* any
    encoding/decoding exceptions.

    >>> ascii_str('')
    ''
    >>> ascii_str(b'')
    ''
    >>> ascii_str('Ech, ale błąd!')
    'Ech, ale b\\u0142\\u0105d!'
    >>> ascii_str(b'Ech, ale b\xc5\x82\xc4\x85d!')
    'Ech, ale b\\u0142\\u0105d!'
    >>> ascii_str(42)
    '42'
    >>> ascii_str(b'\xee\xdd')
    '\\udcee\\udcdd'

    >>> class Nasty(object):
    ...     def __str__(self): raise ValueError
    ...     def __repr__(self): return 'nasŧy'
    ...
    >>> ascii_str(Nasty())
    'nas\\u0167y'
    """
    if isinstance(obj, str):
        s = obj
    else:
        if isinstance(obj, memoryview):
            obj = bytes(obj)
        if isinstance(obj, (bytes, bytearray)):
            s = obj.decode('utf-8', 'surrogateescape')
        else:
            try:
                s = str(obj)
            except ValueError:
                s = repr(obj)
    return s.encode('ascii', 'backslashreplace').decode('ascii')


def as_text(obj):
    r"""
    Get the :class:`str` form of the given textual object.

    Args:
        `obj`:
            A :class:`str`, or a :class:`bytes`/:class:`bytearray`
            (expected to be UTF-8-encoded).

    Returns:
        A :class:`str`.

    Raises:
        :exc:`~exceptions.TypeError` if `obj` is not a textual object;
        :exc:`~exceptions.UnicodeDecodeError` if `obj` is a
        :class:`bytes`/:class:`bytearray` that is not valid UTF-8.

    >>> as_text('Zażółć')
    'Zażółć'
    >>> as_text(b'Za\xc5\xbc\xc3\xb3\xc5\x82\xc4\x87')
    'Zażółć'
    >>> as_text(bytearray(b'abc'))
    'abc'
    >>> as_text(b'\xdd')                # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    UnicodeDecodeError: ...
    >>> as_text(42)                     # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    TypeError: ...
    """
    if isinstance(obj, str):
        return obj
    if isinstance(obj, (bytes, bytearray)):
        return obj.decode('utf-8')
    raise TypeError('{!a} is not a str/bytes/bytearray'.format(obj))


def text_to_bool(s):
    """
    Return True or False, given one of the known strings (see below).

    >>> text_to_bool('1')
    True
    >>> text_to_bool('true')
    True
    >>> text_to_bool('0')
    False
    >>> text_to_bool('false')
    False

    Checks are case-sensitive; other string values cause ValueError:

    >>> text_to_bool('True')          # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ValueError: ...
    >>> text_to_bool('yes')           # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ValueError: ...
    >>> text_to_bool('')              # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ValueError: ...

    Non-str values cause TypeError:

    >>> text_to_bool(True)            # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    TypeError: ...
    >>> text_to_bool(1)               # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    TypeError: ...
    """
    if not isinstance(s, str):
        raise TypeError('{!a} is not a str'.format(s))
    try:
        return text_to_bool.TEXT_TO_BOOL[s]
    except KeyError:
        raise ValueError('"{}" is not a valid boolean (expected one of: {})'.format(
            ascii_str(s),
            ', '.join('"{}"'.format(k) for k in sorted(text_to_bool.TEXT_TO_BOOL)))) from None

text_to_bool.TEXT_TO_BOOL = {
    '1': True,
    'true': True,

    '0': False,
    'false': False,
}
