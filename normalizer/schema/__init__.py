# Copyright (c) 2020-2025 NASK. All rights reserved.

"""
.. note::

   The :class:`Schema` class and the field classes (re-exported here
   from :mod:`normalizer.schema.fields`) are all you need to define a
   normalization schema.
"""


from normalizer.schema._schema import (
    Schema,
    Success,
    Failure,

    TYPE_NAME_TO_FIELD_CLASS,
    as_field,
    as_schema,

    normalize,
    clean_params,
)
from normalizer.schema.fields import (
    MISSING,

    Field,
    StringField,
    NumberField,
    BooleanField,
    DateTimeField,
    DateField,
    ListField,
    MapField,
)


__all__ = [
    'Schema',
    'Success',
    'Failure',

    'TYPE_NAME_TO_FIELD_CLASS',
    'as_field',
    'as_schema',

    'normalize',
    'clean_params',

    'MISSING',

    'Field',
    'StringField',
    'NumberField',
    'BooleanField',
    'DateTimeField',
    'DateField',
    'ListField',
    'MapField',
]
