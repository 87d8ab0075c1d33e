# Copyright (c) 2020-2025 NASK. All rights reserved.

import collections.abc as collections_abc
import functools
import threading


def singleton(cls):
    """
    A class decorator ensuring that the class is instantiated only once.

    Another instantiation attempt raises :exc:`~exceptions.RuntimeError`
    (an instantiation whose :meth:`__init__` failed does not count).

    >>> @singleton
    ... class X(object):
    ...     pass
    ...
    >>> o = X()
    >>> o = X()  # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    RuntimeError: ...
    """
    lock = threading.Lock()
    orig_init = cls.__init__
    instantiated = False

    @functools.wraps(orig_init)
    def __init__(self, *args, **kwargs):
        nonlocal instantiated
        with lock:
            if instantiated:
                raise RuntimeError('an instance of singleton class {!r} '
                                   'has already been created'.format(cls))
            instantiated = True
        try:
            orig_init(self, *args, **kwargs)
        except BaseException:
            with lock:
                instantiated = False
            raise

    cls.__init__ = __init__
    return cls


def is_seq(obj):
    """
    Check if the given object is a *sequence* but not a textual one.

    >>> is_seq([1, 2])
    True
    >>> is_seq((1, 2))
    True
    >>> is_seq('12')
    False
    >>> is_seq(b'12')
    False
    >>> is_seq(bytearray(b'12'))
    False
    >>> is_seq({1, 2})
    False
    >>> is_seq({'a': 1})
    False
    """
    return (isinstance(obj, collections_abc.Sequence)
            and not isinstance(obj, (str, bytes, bytearray)))


def is_mapping(obj):
    """
    >>> is_mapping({'a': 1})
    True
    >>> is_mapping([('a', 1)])
    False
    """
    return isinstance(obj, collections_abc.Mapping)
