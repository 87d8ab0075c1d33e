# Copyright (c) 2020-2025 NASK. All rights reserved.

import unittest

from unittest_expander import expand, foreach, param

from normalizer.exceptions import (
    DataAPIError,
    FieldRequiredError,
    FieldTypeMismatchError,
    FieldValueError,
    NestedFieldValueError,
    ParamCleaningError,
    ParamValueCleaningError,
    SchemaError,
    iter_flattened_errors,
)


@expand
class TestFieldValueErrors(unittest.TestCase):

    @foreach(
        param(FieldTypeMismatchError),
        param(FieldRequiredError),
    )
    def test_description_is_public_message(self, exc_class):
        exc = exc_class(public_message='expected number')
        self.assertIsInstance(exc, FieldValueError)
        self.assertIsInstance(exc, ValueError)
        self.assertEqual(exc.error_description, 'expected number')
        self.assertEqual(str(exc), 'expected number')

    def test_default_public_message(self):
        self.assertEqual(FieldValueError().error_description, 'invalid value')

    def test_nested(self):
        errors = {'a': 'expected number', 'b': {'c': 'required date'}}
        exc = NestedFieldValueError(errors=errors)
        self.assertIsInstance(exc, FieldValueError)
        self.assertIs(exc.errors, errors)
        self.assertIs(exc.error_description, errors)

    def test_nested_requires_errors(self):
        with self.assertRaises(TypeError):
            NestedFieldValueError()

    def test_illegal_kwargs(self):
        with self.assertRaises(TypeError):
            FieldValueError(foo='bar')


class TestSchemaError(unittest.TestCase):

    def test_is_TypeError_not_FieldValueError(self):
        self.assertTrue(issubclass(SchemaError, TypeError))
        self.assertFalse(issubclass(SchemaError, FieldValueError))


class TestParamValueCleaningError(unittest.TestCase):

    def test(self):
        errors = {
            'zip': 'expected number',
            'address': {'city': 'required string, got nil'},
            'langs': 'expected string list',
        }
        exc = ParamValueCleaningError(errors)
        self.assertIsInstance(exc, ParamCleaningError)
        self.assertIsInstance(exc, DataAPIError)
        self.assertIs(exc.errors, errors)
        self.assertEqual(exc.args, (errors,))
        self.assertEqual(exc.public_message, (
            'Problem with value of parameter "address.city" (required string, got nil). '
            'Problem with value of parameter "langs" (expected string list). '
            'Problem with value of parameter "zip" (expected number).'))

    def test_ParamCleaningError_default_message(self):
        self.assertEqual(ParamCleaningError().public_message, 'Invalid parameter(s).')


class Test_iter_flattened_errors(unittest.TestCase):

    def test_empty(self):
        self.assertEqual(list(iter_flattened_errors({})), [])

    def test_non_str_keys(self):
        self.assertEqual(
            list(iter_flattened_errors({2: 'expected date', 1: {'x': 'expected map'}})),
            [('1.x', 'expected map'), ('2', 'expected date')])
