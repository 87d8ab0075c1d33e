# Copyright (c) 2020-2025 NASK. All rights reserved.

"""
Schema-driven normalization of untyped (string-keyed) input maps --
such as HTTP request parameters or decoded JSON bodies -- into typed
records (or per-field error records).

>>> from normalizer import normalize
>>> normalize({'age': '42', 'joined': '2020-02-11T00:00:00+0100'},
...           {'age': 'number', 'joined': 'datetime'}).ok
True
"""


from normalizer.exceptions import (
    SchemaError,
    FieldValueError,
    FieldTypeMismatchError,
    FieldRequiredError,
    NestedFieldValueError,
    DataAPIError,
    ParamCleaningError,
    ParamValueCleaningError,
)
from normalizer.schema import (
    Schema,
    Success,
    Failure,
    MISSING,

    Field,
    StringField,
    NumberField,
    BooleanField,
    DateTimeField,
    DateField,
    ListField,
    MapField,

    as_field,
    as_schema,
    normalize,
    clean_params,
)


__all__ = [
    'SchemaError',
    'FieldValueError',
    'FieldTypeMismatchError',
    'FieldRequiredError',
    'NestedFieldValueError',
    'DataAPIError',
    'ParamCleaningError',
    'ParamValueCleaningError',

    'Schema',
    'Success',
    'Failure',
    'MISSING',

    'Field',
    'StringField',
    'NumberField',
    'BooleanField',
    'DateTimeField',
    'DateField',
    'ListField',
    'MapField',

    'as_field',
    'as_schema',
    'normalize',
    'clean_params',
]
