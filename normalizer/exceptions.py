# Copyright (c) 2020-2025 NASK. All rights reserved.

import collections.abc as collections_abc

from normalizer.encoding_helpers import ascii_str


#
# Generic mix-ins
#

class _ErrorWithPublicMessageMixin(object):

    r"""
    A mix-in class that provides the :attr:`public_message` property.

    The value of this property is a :class:`str`.  It is taken either
    from the `public_message` constructor keyword argument or -- if the
    argument was not specified -- from the value of the
    :attr:`default_public_message` attribute.

    .. warning::

       Generally, the message is intended to be presented to clients.
       **Ensure that you do not disclose any sensitive details in the
       message.**

    The :class:`str` conversion uses the value of :attr:`public_message`:

    >>> class SomeError(_ErrorWithPublicMessageMixin, Exception):
    ...     pass
    ...
    >>> str(SomeError('a', 'b'))  # using attribute default_public_message
    'Internal error.'
    >>> str(SomeError('a', 'b', public_message='Spąm.'))
    'Spąm.'

    The :func:`repr` conversion results in a programmer-readable
    representation (containing the class name, :func:`repr`-formatted
    constructor arguments and the :attr:`public_message` property):

    >>> SomeError('a', 'b')   # using class's default_public_message
    <SomeError: args=('a', 'b'); public_message='Internal error.'>
    >>> SomeError('a', 'b', public_message='Spam.')
    <SomeError: args=('a', 'b'); public_message='Spam.'>
    """

    #: (overridable in subclasses)
    default_public_message = 'Internal error.'

    def __init__(self, *args, **kwargs):
        try:
            public_message = kwargs.pop('public_message')
        except KeyError:
            pass
        else:
            self._public_message = str(public_message)
        try:
            super(_ErrorWithPublicMessageMixin, self).__init__(*args, **kwargs)
        except TypeError:
            if kwargs:
                raise TypeError(
                    'illegal keyword arguments for {} constructor: {}'.format(
                        self.__class__.__name__,
                        ', '.join(sorted(map(repr, kwargs)))))
            else:
                raise

    @property
    def public_message(self):
        """The aforementioned property."""
        try:
            return self._public_message
        except AttributeError:
            # (in subclasses `default_public_message` can also be a @property)
            self._public_message = str(self.default_public_message)
            return self._public_message

    def __str__(self):
        return self.public_message

    def __repr__(self):
        return ('<{0.__class__.__name__}: args={0.args!r}; '
                'public_message={0.public_message!r}>'.format(self))


#
# Schema definition errors

class SchemaError(TypeError):

    """
    Raised when a schema (or a single schema node) cannot be built
    because its shape or options are not legal.

    It is a programming error (the schema is defined by the caller,
    not by the data being normalized), therefore it is *not* caught by
    the normalization machinery.
    """


#
# Field-level errors

class FieldValueError(_ErrorWithPublicMessageMixin, ValueError):

    """
    Intended to be raised in :meth:`~.Field.clean_value` (and the
    methods it calls) of :class:`normalizer.schema.fields.Field`
    subclasses.

    Such an exception is caught by the normalization driver
    (:meth:`normalizer.schema.Schema.normalize`) and its
    :attr:`error_description` becomes the value assigned to the
    offending field in the resultant *error record*.

    >>> exc = FieldValueError(public_message='expected number')
    >>> exc.error_description
    'expected number'
    """

    default_public_message = 'invalid value'

    @property
    def error_description(self):
        """
        The object to be put into the error record (here: the public
        message; subclasses may provide a structured description).
        """
        return self.public_message


class FieldTypeMismatchError(FieldValueError):
    """
    Raised when the given value's shape or content cannot be coerced
    to the declared type.
    """


class FieldRequiredError(FieldValueError):
    """
    Raised when a field marked as required got no value or an explicit
    null, and no default has been configured.
    """


class NestedFieldValueError(FieldValueError):

    """
    Raised when a nested map has been normalized unsuccessfully.

    Instances *must* be initialized with the `errors` keyword-only
    argument: the nested error record (a :class:`dict`); it becomes
    the :attr:`errors` attribute as well as the
    :attr:`error_description` (so that the nested structure is
    preserved rather than flattened into a string).

    >>> exc = NestedFieldValueError(errors={'age': 'expected number'})
    >>> exc.error_description
    {'age': 'expected number'}
    >>> exc.public_message
    'invalid map'

    >>> NestedFieldValueError()   # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    TypeError: __init__() needs keyword-only argument errors
    """

    default_public_message = 'invalid map'

    def __init__(self, *args, **kwargs):
        try:
            self.errors = kwargs.pop('errors')
        except KeyError as exc:
            [kw] = exc.args
            raise TypeError('__init__() needs keyword-only argument ' + kw)
        super(NestedFieldValueError, self).__init__(*args, **kwargs)

    @property
    def error_description(self):
        return self.errors


#
# API-level errors

class DataAPIError(_ErrorWithPublicMessageMixin, Exception):

    """
    The base class for *data-from-client*-related exceptions raised
    by the public entry points of this package (or by the code of
    views that make use of them).

    (They are **not** intended to be raised in the methods of
    :class:`~normalizer.schema.fields.Field` subclasses -- use
    :exc:`FieldValueError` instead.)

    >>> exc = DataAPIError('a', 'b')
    >>> exc.args
    ('a', 'b')
    >>> exc.public_message   # using attribute default_public_message
    'Internal error.'
    >>> exc = DataAPIError('a', 'b', public_message='Spam.')
    >>> str(exc)
    'Spam.'
    """


class ParamCleaningError(DataAPIError):
    """
    The base class for exceptions raised when parameter cleaning
    (normalization) fails.

    This class can also be instantiated directly (and raised) by
    *views*.
    """
    default_public_message = 'Invalid parameter(s).'


class ParamValueCleaningError(ParamCleaningError):

    r"""
    Raised (by :func:`normalizer.clean_params`) when parameter value(s)
    cannot be normalized.

    Each instance should be initialized with one argument: the *error
    record* (a :class:`dict` that maps field identifiers to error
    descriptions, possibly nested); it is exposed as the :attr:`errors`
    attribute.

    This exception class provides :attr:`default_public_message` as a
    property whose value is a user-readable message that includes, for
    each offending field (nested ones referred to with dotted names),
    its name and the error description.

    >>> exc = ParamValueCleaningError({
    ...     'age': 'expected number',
    ...     'profile': {'name': 'required string'},
    ... })
    >>> exc.public_message == (
    ...     'Problem with value of parameter "age" (expected number). '
    ...     'Problem with value of parameter "profile.name" (required string).')
    True
    >>> exc.errors == {'age': 'expected number',
    ...                'profile': {'name': 'required string'}}
    True
    """

    msg_template = 'Problem with value of parameter "{key}" ({description}).'

    def __init__(self, errors):
        self.errors = errors
        super(ParamValueCleaningError, self).__init__(errors)

    @property
    def default_public_message(self):
        """The aforementioned property."""
        return ' '.join(
            self.msg_template.format(
                key=key,
                description=ascii_str(description))
            for key, description in iter_flattened_errors(self.errors))


def iter_flattened_errors(errors, key_prefix=''):
    """
    Generate `(<dotted key>, <error description string>)` pairs from
    the given (possibly nested) error record; keys are sorted.

    >>> list(iter_flattened_errors({
    ...     'b': 'expected boolean',
    ...     'a': {'y': 'required date', 'x': {'z': 'expected number'}},
    ... }))
    [('a.x.z', 'expected number'), ('a.y', 'required date'), ('b', 'expected boolean')]
    """
    for key in sorted(errors, key=ascii_str):
        description = errors[key]
        dotted_key = key_prefix + ascii_str(key)
        if isinstance(description, collections_abc.Mapping):
            yield from iter_flattened_errors(description, dotted_key + '.')
        else:
            yield dotted_key, description
