# Copyright (c) 2020-2025 NASK. All rights reserved.


import collections

from pyramid.decorator import reify

from normalizer.class_helpers import is_mapping
from normalizer.config import get_config
from normalizer.encoding_helpers import ascii_str
from normalizer.exceptions import (
    FieldValueError,
    ParamValueCleaningError,
    SchemaError,
)
from normalizer.log_helpers import get_logger
from normalizer.schema.fields import (
    MISSING,
    BooleanField,
    DateField,
    DateTimeField,
    Field,
    ListField,
    MapField,
    NumberField,
    StringField,
)


LOGGER = get_logger(__name__)



#
# Normalization results

class Success(collections.namedtuple('Success', 'record')):

    """
    The result of a successful normalization.

    The :attr:`record` attribute is a new :class:`dict` that maps
    field identifiers to cleaned values (fields that were absent in
    the input and got no default are omitted).
    """

    __slots__ = ()

    ok = True


class Failure(collections.namedtuple('Failure', 'errors')):

    """
    The result of an unsuccessful normalization.

    The :attr:`errors` attribute is the *error record*: a new
    :class:`dict` that maps identifiers of the offending fields to
    error descriptions (a :class:`str` or -- for nested maps -- a
    nested error record); it is never empty.
    """

    __slots__ = ()

    ok = False



#
# Schemas

class Schema(object):

    """
    A normalization schema: a mapping of field identifiers to field
    specifications (instances of :class:`~.fields.Field` subclasses).

    Fields can be declared as class attributes of a subclass:

    >>> class PersonSchema(Schema):
    ...     name = StringField(required=True)
    ...     age = NumberField()
    ...
    >>> PersonSchema().normalize({'name': 'Ann', 'age': '42'})
    Success(record={'name': 'Ann', 'age': 42})

    ...and/or specified with a mapping passed to the constructor (its
    values can be field instances or any other node specifications
    accepted by :func:`as_field`; they take precedence over the
    declared fields with the same identifiers):

    >>> schema = Schema({'tags': ['string'], 'active': 'boolean'})
    >>> schema.normalize({'tags': 'x', 'active': 'true'})
    Failure(errors={'tags': 'expected string list'})

    A schema object is not modified after its construction, so it can
    be safely shared and used concurrently.

    Raises:
        :exc:`~normalizer.exceptions.SchemaError` if the schema is not
        legal (including the case when its nesting depth exceeds the
        configured `max_depth`).
    """

    def __init__(self, fields=None):
        self._fields = {}
        self._set_fields(fields)
        self._verify_depth()

    def __repr__(self):
        return '{}({{{}}})'.format(
            self.__class__.__qualname__,
            ', '.join(
                '{!r}: {!r}'.format(key, field)
                for key, field in sorted(self._fields.items(),
                                         key=lambda item: ascii_str(item[0]))))


    #
    # public properties

    @reify
    def field_names(self):
        """
        Instance property: a :class:`frozenset` of all field identifiers.
        """
        return frozenset(self._fields)

    @reify
    def depth(self):
        """
        Instance property: the nesting depth of the schema (1 for a
        schema with no nested lists/maps).
        """
        return 1 + max(
            (field.nesting_depth() for field in self._fields.values()),
            default=0)


    #
    # public methods

    def get_field(self, key):
        """Get the field specification for the given field identifier."""
        return self._fields[key]

    def normalize(self, params):
        """
        Normalize the given input map.

        Args:
            `params`:
                A mapping whose keys are strings (the input's keys that
                correspond to no field are ignored).

        Returns:
            A :class:`Success` or :class:`Failure` instance.

        Raises:
            :exc:`~exceptions.TypeError` if `params` is not a mapping.

        The input is never modified.  All fields are processed even if
        some of them fail.
        """
        if not is_mapping(params):
            raise TypeError('params should be a mapping (got an instance '
                            'of {})'.format(type(params).__qualname__))
        record = {}
        errors = {}
        for key, field in self._fields.items():
            value = params.get(str(key), MISSING)
            try:
                cleaned_value = field.clean_value(value)
            except FieldValueError as exc:
                errors[key] = exc.error_description
            else:
                if cleaned_value is not MISSING:
                    record[key] = cleaned_value
        if errors:
            LOGGER.debug('normalization failed for field(s): %s',
                         ', '.join(sorted(map(ascii_str, errors))))
            return Failure(errors)
        return Success(record)


    #
    # non-public internals

    def _set_fields(self, fields):
        seen_keys = set()
        for cls in self.__class__.__mro__:
            for key, obj in vars(cls).items():
                if key in seen_keys:
                    continue
                seen_keys.add(key)
                if isinstance(obj, Field):
                    self._fields[key] = obj
        if fields is not None:
            if not is_mapping(fields):
                raise SchemaError('fields should be specified as a mapping '
                                  '(got: {!a})'.format(fields))
            for key, node_spec in fields.items():
                self._fields[key] = as_field(node_spec)

    def _verify_depth(self):
        max_depth = get_config().max_depth
        if self.depth > max_depth:
            raise SchemaError(
                'the nesting depth of the schema ({}) exceeds the '
                'configured maximum ({})'.format(self.depth, max_depth))



#
# Schema node shorthand

TYPE_NAME_TO_FIELD_CLASS = {
    'string': StringField,
    'number': NumberField,
    'boolean': BooleanField,
    'datetime': DateTimeField,
    'date': DateField,
}


def as_field(node_spec):
    """
    Make a field (a :class:`~.fields.Field` subclass instance) from the
    given schema node specification.

    The specification can be:

    * a type name: ``'string'``, ``'number'``, ``'boolean'``,
      ``'datetime'`` or ``'date'``;
    * a :class:`~.fields.Field` subclass (to be instantiated) or
      instance (to be returned as is);
    * a one-element :class:`list` whose element is a node
      specification describing the list's elements;
    * a mapping (to be passed to the :class:`Schema` constructor) or a
      :class:`Schema` instance/subclass -- describing a nested map;
    * a ``(<any of the above>, <options mapping>)`` tuple (the
      options are passed to the field's constructor as keyword
      arguments).

    >>> as_field('number')
    NumberField()
    >>> as_field(('datetime', {'required': True, 'with_offset': True}))
    DateTimeField(required=True, with_offset=True)
    >>> as_field(['string'])
    ListField(item=StringField())

    Raises:
        :exc:`~normalizer.exceptions.SchemaError` if the specification
        is not legal.
    """
    if isinstance(node_spec, tuple):
        if len(node_spec) != 2 or not is_mapping(node_spec[1]):
            raise SchemaError(
                'a tuple being a schema node specification should be '
                'a (<node specification>, <options mapping>) pair '
                '(got: {!a})'.format(node_spec))
        node_spec, options = node_spec
        if not all(isinstance(opt_name, str) for opt_name in options):
            raise SchemaError('option names should be strings '
                              '(got: {!a})'.format(sorted(options, key=ascii_str)))
        return _make_field(node_spec, dict(options))
    return _make_field(node_spec, {})


def _make_field(node_spec, options):
    if isinstance(node_spec, Field):
        if options:
            raise SchemaError('options cannot be applied to an already '
                              'made field {!r}'.format(node_spec))
        return node_spec
    if isinstance(node_spec, str):
        try:
            field_class = TYPE_NAME_TO_FIELD_CLASS[node_spec]
        except KeyError:
            raise SchemaError('unknown type name {!a} (expected one of: {})'.format(
                node_spec, ', '.join(sorted(TYPE_NAME_TO_FIELD_CLASS)))) from None
        return field_class(**options)
    if isinstance(node_spec, type) and issubclass(node_spec, Field):
        return node_spec(**options)
    if isinstance(node_spec, list):
        if len(node_spec) != 1:
            raise SchemaError('a list being a schema node specification should '
                              'contain exactly one element (got: {!a})'.format(node_spec))
        [item_spec] = node_spec
        return ListField(as_field(item_spec), **options)
    if (is_mapping(node_spec)
          or isinstance(node_spec, Schema)
          or (isinstance(node_spec, type) and issubclass(node_spec, Schema))):
        return MapField(node_spec, **options)
    raise SchemaError('{!a} is not a legal schema node '
                      'specification'.format(node_spec))



#
# Public entry points

def as_schema(schema):
    """
    Get a :class:`Schema` instance from the given :class:`Schema`
    instance (returned as is) or subclass, or mapping.
    """
    if isinstance(schema, Schema):
        return schema
    if isinstance(schema, type) and issubclass(schema, Schema):
        return schema()
    if is_mapping(schema):
        return Schema(schema)
    raise SchemaError('schema should be a Schema instance/subclass '
                      'or a mapping (got: {!a})'.format(schema))


def normalize(params, schema):
    """
    Normalize the given input map according to the given schema.

    Args:
        `params`:
            A mapping whose keys are strings.
        `schema`:
            A :class:`Schema` instance or subclass, or a mapping
            accepted by the :class:`Schema` constructor.

    Returns:
        A :class:`Success` instance (with the :attr:`record` attribute)
        or a :class:`Failure` instance (with the :attr:`errors`
        attribute).  Invalid data never cause an exception.

    >>> normalize({'age': '42', 'name': 'Ann'}, {'age': 'number'})
    Success(record={'age': 42})
    >>> normalize({'age': 'old'}, {'age': 'number'})
    Failure(errors={'age': 'expected number'})

    Raises:
        :exc:`~normalizer.exceptions.SchemaError` if the schema is
        not legal; :exc:`~exceptions.TypeError` if `params` is not a
        mapping.
    """
    return as_schema(schema).normalize(params)


def clean_params(params, schema):
    """
    Like :func:`normalize` but returning just the record on success
    and raising :exc:`~normalizer.exceptions.ParamValueCleaningError`
    (its :attr:`errors` attribute being the error record) on failure.
    """
    result = normalize(params, schema)
    if not result.ok:
        raise ParamValueCleaningError(result.errors)
    return result.record
