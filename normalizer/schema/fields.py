# Copyright (c) 2020-2025 NASK. All rights reserved.

"""
Schema node classes (*fields*).

Each concrete field class knows how to convert (coerce) an untyped
input value to its own type and how to apply the options it has been
constructed with.  The set of concrete classes is closed:

* :class:`StringField`, :class:`NumberField`, :class:`BooleanField`,
  :class:`DateTimeField`, :class:`DateField` -- for primitive values;
* :class:`ListField` -- for lists of values described by another field;
* :class:`MapField` -- for nested maps described by a
  :class:`~normalizer.schema.Schema`.
"""


import collections.abc as collections_abc
import copy
import datetime
import decimal
import math
import numbers

from normalizer.class_helpers import (
    is_mapping,
    is_seq,
    singleton,
)
from normalizer.datetime_helpers import (
    ISOParseError,
    datetime_utc_normalize,
    parse_iso_date,
    parse_iso_datetime_with_offset,
)
from normalizer.encoding_helpers import (
    as_text,
    text_to_bool,
)
from normalizer.exceptions import (
    FieldRequiredError,
    FieldTypeMismatchError,
    FieldValueError,
    NestedFieldValueError,
    SchemaError,
)
from normalizer.regexes import (
    FLOAT_TEXT_REGEX,
    INTEGER_TEXT_REGEX,
)



#
# The "missing value" marker

@singleton
class _MissingType(object):

    """
    The type of the :data:`MISSING` marker.

    >>> MISSING
    MISSING
    >>> bool(MISSING)
    False
    >>> copy.deepcopy(MISSING) is MISSING
    True
    """

    def __repr__(self):
        return 'MISSING'

    def __bool__(self):
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return 'MISSING'


#: Denotes that the input did not contain the key at all (as opposed
#: to `None` which denotes an explicit null value).
MISSING = _MissingType()


_TEXT_TYPES = (str, bytes, bytearray)



#
# The base field specification class

class Field(object):

    """
    The base class for all schema node (field specification) classes.

    Constructors of all field classes accept the following keyword-only
    arguments (*options*):

    * `required` (default: :obj:`False`):
          If true: a null or missing value is an error (unless
          `default` is specified).
    * `default` (default: :obj:`None`, i.e., no default):
          The value used instead of a null or missing one (it is
          *not* validated).  Note that, as :obj:`None` means "no
          default", an absent key cannot be turned into an explicit
          null.
    * type-specific options, listed in the :attr:`option_names`
      attribute of the concrete class (e.g., `with_offset` for
      :class:`DateTimeField`).

    Any other keyword argument causes :exc:`~.SchemaError`.

    A field object is not modified after its construction, so it can
    be safely shared and used concurrently.
    """

    #: (to be set in concrete subclasses)
    type_label = None

    #: names of the attributes that can be set with constructor kwargs
    option_names = frozenset({'required', 'default'})

    required = False
    default = None

    required_msg_template = 'required {}'
    required_but_null_msg_template = 'required {}, got nil'
    type_mismatch_msg_template = 'expected {}'

    def __init__(self, **kwargs):
        if type(self).convert_value is Field.convert_value:
            raise SchemaError('{} is an abstract class'.format(
                self.__class__.__qualname__))
        self._init_kwargs = kwargs
        self._set_per_instance_attrs(kwargs)
        self._verify_options()

    def __repr__(self):
        return '{}({})'.format(
            self.__class__.__qualname__,
            ', '.join(
                '{}={!r}'.format(key, value)
                for key, value in sorted(self._init_kwargs.items())))


    #
    # overridable methods

    def describe(self):
        """
        Get the type descriptor to be used in error messages (e.g.,
        ``'number'`` or ``'string list'``).
        """
        return self.type_label

    def nesting_depth(self):
        """
        Get the number of nested levels (of lists and/or maps) the
        field introduces (0 for primitive fields).
        """
        return 0

    def clean_value(self, value):
        """
        The method called by the *schema*'s normalization machinery.

        Args:
            `value`:
                A single input value: any object, or :obj:`None`
                (explicit null), or :data:`MISSING` (the key was
                absent).

        Returns:
            The value after type conversion and application of the
            options (it can still be :obj:`None` or :data:`MISSING`).

        Raises:
            :exc:`~.FieldValueError` (a subclass of it).

        A null or missing value is never converted, just passed to
        :meth:`apply_options`.
        """
        if value is not None and value is not MISSING:
            value = self.convert_value(value)
        return self.apply_options(value)

    def convert_value(self, value):
        """
        Convert the given (non-null and non-missing) value to the type
        of the field; raise :exc:`~.FieldTypeMismatchError` if that is
        not possible.  To be implemented in concrete subclasses.
        """
        raise NotImplementedError

    def apply_options(self, value):
        """
        Apply `default` and `required` to a null/missing value, then
        apply any type-specific options (see: :meth:`adjust_value`).

        A configured `default` is substituted before the `required`
        check could fail, so a required field with a default never
        causes an error.
        """
        if value is None or value is MISSING:
            if self.default is None:
                if self.required:
                    raise FieldRequiredError(public_message=self._format_required_msg(value))
                return value
            value = copy.deepcopy(self.default)
        return self.adjust_value(value)

    def adjust_value(self, value):
        """
        Apply type-specific options to an already converted value (or
        to the default value). The default implementation just passes
        the value unchanged.
        """
        return value


    #
    # non-public internals

    def _set_per_instance_attrs(self, per_instance_attrs):
        # per-instance customizations of class-level attributes
        cls = self.__class__
        for attr_name, obj in per_instance_attrs.items():
            if attr_name not in cls.option_names:
                raise SchemaError(
                    '{}.__init__() got an unexpected keyword argument {!a}'
                    .format(cls.__qualname__, attr_name))
            setattr(self, attr_name, obj)

    def _verify_options(self):
        if not isinstance(self.required, bool):
            raise SchemaError(
                "'required' specified for {} should be "
                "a bool (got: {!a})".format(
                    self.__class__.__qualname__,
                    self.required))

    def _format_required_msg(self, value):
        if value is None:
            return self.required_but_null_msg_template.format(self.describe())
        return self.required_msg_template.format(self.describe())

    def _type_mismatch_error(self, reason=None):
        msg = self.type_mismatch_msg_template.format(self.describe())
        if reason is not None:
            msg = '{} ({})'.format(msg, reason)
        return FieldTypeMismatchError(public_message=msg)

    def _get_text(self, value):
        try:
            return as_text(value)
        except UnicodeDecodeError:
            raise self._type_mismatch_error() from None



#
# Concrete field specification classes

class StringField(Field):

    """
    For text values.

    Text (:class:`str`; or UTF-8 :class:`bytes`/:class:`bytearray`)
    is passed through; any other scalar is converted to a :class:`str`
    (booleans as ``'true'``/``'false'``, dates and datetimes in the
    *ISO-8601* format); maps, sequences and sets are rejected.

    >>> f = StringField()
    >>> f.clean_value(42)
    '42'
    >>> f.clean_value(False)
    'false'
    >>> f.clean_value(['a'])             # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    FieldTypeMismatchError: expected string
    """

    type_label = 'string'

    def convert_value(self, value):
        if isinstance(value, _TEXT_TYPES):
            return self._get_text(value)
        if (is_mapping(value)
              or is_seq(value)
              or isinstance(value, collections_abc.Set)):
            raise self._type_mismatch_error()
        if isinstance(value, bool):
            return 'true' if value else 'false'
        if isinstance(value, (datetime.date, datetime.time)):
            return value.isoformat()
        return str(value)


class NumberField(Field):

    """
    For numbers.

    Real numbers (except booleans) are passed through. Text is parsed:
    as a :class:`float` if it contains the decimal point, otherwise as
    an :class:`int`; the whole text must be a valid number.

    >>> f = NumberField()
    >>> f.clean_value('42')
    42
    >>> f.clean_value('42.5')
    42.5
    >>> f.clean_value(-7)
    -7
    >>> f.clean_value('42.0.0')          # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    FieldTypeMismatchError: expected number
    """

    type_label = 'number'

    def convert_value(self, value):
        if (isinstance(value, (numbers.Real, decimal.Decimal))
              and not isinstance(value, bool)):
            return value
        if isinstance(value, _TEXT_TYPES):
            return self._parse_number(self._get_text(value))
        raise self._type_mismatch_error()

    def _parse_number(self, text):
        try:
            if '.' in text:
                if FLOAT_TEXT_REGEX.search(text):
                    number = float(text)
                    if math.isfinite(number):
                        return number
            elif INTEGER_TEXT_REGEX.search(text):
                return int(text)
        except ValueError:
            # (e.g., too many digits to convert)
            pass
        raise self._type_mismatch_error()


class BooleanField(Field):

    """
    For booleans: accepts :obj:`True`/:obj:`False` as well as the
    (case-sensitive) strings ``'true'``, ``'1'``, ``'false'``, ``'0'``.
    """

    type_label = 'boolean'

    def convert_value(self, value):
        if isinstance(value, bool):
            return value
        if isinstance(value, _TEXT_TYPES):
            try:
                return text_to_bool(self._get_text(value))
            except ValueError:
                pass
        raise self._type_mismatch_error()


class DateTimeField(Field):

    """
    For date-and-time (timestamp) values, automatically normalized to UTC.

    The input should be an *ISO-8601*-formatted text, with an explicit
    UTC offset (or a timezone-aware :class:`datetime.datetime`).

    The cleaned value is a timezone-aware (UTC) :class:`datetime.datetime`
    or -- if the `with_offset` option is true -- a ``(<that datetime>,
    <the UTC offset of the input as a number of seconds>)`` tuple.

    >>> DateTimeField().clean_value('2020-02-11T00:00:00+0100')
    datetime.datetime(2020, 2, 10, 23, 0, tzinfo=datetime.timezone.utc)
    >>> DateTimeField(with_offset=True).clean_value('2020-02-11T00:00:00+0100')
    (datetime.datetime(2020, 2, 10, 23, 0, tzinfo=datetime.timezone.utc), 3600)
    """

    type_label = 'datetime'

    option_names = Field.option_names | {'with_offset'}

    with_offset = False

    def convert_value(self, value):
        try:
            if isinstance(value, datetime.datetime):
                return datetime_utc_normalize(value)
            if isinstance(value, _TEXT_TYPES):
                return parse_iso_datetime_with_offset(self._get_text(value))
        except ISOParseError as exc:
            raise self._type_mismatch_error(exc.reason) from None
        raise self._type_mismatch_error()

    def adjust_value(self, value):
        if not self.with_offset and isinstance(value, tuple) and len(value) == 2:
            dt, _offset = value
            return dt
        return value

    def _verify_options(self):
        super(DateTimeField, self)._verify_options()
        if not isinstance(self.with_offset, bool):
            raise SchemaError(
                "'with_offset' specified for {} should be "
                "a bool (got: {!a})".format(
                    self.__class__.__qualname__,
                    self.with_offset))


class DateField(Field):

    """
    For calendar dates: the input should be an *ISO-8601*-formatted
    text (``YYYY-MM-DD``), or a :class:`datetime.date` (passed through).
    """

    type_label = 'date'

    def convert_value(self, value):
        if isinstance(value, datetime.date) and not isinstance(value, datetime.datetime):
            return value
        if isinstance(value, _TEXT_TYPES):
            try:
                return parse_iso_date(self._get_text(value))
            except ISOParseError as exc:
                raise self._type_mismatch_error(exc.reason) from None
        raise self._type_mismatch_error()


class ListField(Field):

    """
    For lists whose each element is described by the field being the
    :attr:`item` attribute (obligatory; can be given as the first
    positional argument).

    The options of the list field concern the list as a whole (e.g.,
    `required` means that the list itself must be present); the
    elements are subject to the options of the :attr:`item` field.

    If any element cannot be cleaned, the whole list is rejected with
    a single error message based on the list's type descriptor (e.g.,
    ``'expected number list'`` or -- if the element's field required
    a value and got null -- ``'required number list'``).

    >>> f = ListField(NumberField())
    >>> f.describe()
    'number list'
    >>> f.clean_value(['42', 43, None])
    [42, 43, None]
    >>> f.clean_value(['42', 'x'])       # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    FieldTypeMismatchError: expected number list
    """

    option_names = Field.option_names | {'item'}

    item = None

    def __init__(self, item=None, **kwargs):
        if item is not None:
            kwargs['item'] = item
        super(ListField, self).__init__(**kwargs)

    def describe(self):
        return '{} list'.format(self.item.describe())

    def nesting_depth(self):
        return 1 + self.item.nesting_depth()

    def convert_value(self, value):
        if not is_seq(value):
            raise self._type_mismatch_error()
        cleaned_values = []
        for item_value in value:
            try:
                cleaned_values.append(self.item.clean_value(item_value))
            except FieldRequiredError as exc:
                raise FieldRequiredError(public_message=(
                    self.required_msg_template.format(self.describe()))) from exc
            except FieldValueError as exc:
                raise self._type_mismatch_error() from exc
        return cleaned_values

    def _verify_options(self):
        super(ListField, self)._verify_options()
        if self.item is None:
            raise SchemaError("'item' not specified for {} "
                              "(neither as a class attribute "
                              "nor as a constructor argument)"
                              .format(self.__class__.__qualname__))
        if not isinstance(self.item, Field):
            raise SchemaError("'item' specified for {} should be "
                              "a Field instance (got: {!a})"
                              .format(self.__class__.__qualname__,
                                      self.item))


class MapField(Field):

    """
    For nested maps, described by the :attr:`schema` attribute
    (obligatory; can be given as the first positional argument): a
    :class:`~normalizer.schema.Schema` instance or subclass, or a
    mapping accepted by the :class:`~normalizer.schema.Schema`
    constructor.

    If the nested map cannot be normalized, the error description is
    the nested error record (*not* a string).
    """

    type_label = 'map'

    option_names = Field.option_names | {'schema'}

    schema = None

    def __init__(self, schema=None, **kwargs):
        if schema is not None:
            kwargs['schema'] = schema
        super(MapField, self).__init__(**kwargs)

    def nesting_depth(self):
        return self.schema.depth

    def convert_value(self, value):
        if not is_mapping(value):
            raise self._type_mismatch_error()
        result = self.schema.normalize(value)
        if not result.ok:
            raise NestedFieldValueError(errors=result.errors)
        return result.record

    def _verify_options(self):
        from normalizer.schema._schema import Schema
        super(MapField, self)._verify_options()
        if self.schema is None:
            raise SchemaError("'schema' not specified for {} "
                              "(neither as a class attribute "
                              "nor as a constructor argument)"
                              .format(self.__class__.__qualname__))
        if isinstance(self.schema, type) and issubclass(self.schema, Schema):
            self.schema = self.schema()
        elif is_mapping(self.schema):
            self.schema = Schema(self.schema)
        elif not isinstance(self.schema, Schema):
            raise SchemaError("'schema' specified for {} should be a "
                              "Schema instance/subclass or a mapping "
                              "(got: {!a})".format(self.__class__.__qualname__,
                                                   self.schema))
