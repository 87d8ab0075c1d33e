# Copyright (c) 2020-2025 NASK. All rights reserved.

import datetime
import unittest
from unittest.mock import (
    ANY,
    MagicMock,
    call,
    patch,
    sentinel as sen,
)

from pyramid.httpexceptions import (
    HTTPBadRequest,
    HTTPInternalServerError,
    HTTPNotFound,
    HTTPServerError,
)
from pyramid.request import Request

from normalizer.exceptions import (
    DataAPIError,
    ParamCleaningError,
    ParamValueCleaningError,
    SchemaError,
)
from normalizer.pyramid_commons import (
    exc_to_http_exc,
    exception_view,
    includeme,
    request_params_dict,
    with_normalized_params,
)
from normalizer.schema import (
    DateField,
    Schema,
)


class Test_exc_to_http_exc(unittest.TestCase):

    @patch('normalizer.pyramid_commons._pyramid_commons.LOGGER')
    def test_HTTPException_no_server_error(self, LOGGER):
        exc = HTTPNotFound()
        http_exc = exc_to_http_exc(exc)
        self.assertIs(http_exc, exc)
        self.assertEqual(http_exc.code, 404)
        self.assertEqual(LOGGER.mock_calls, [
            call.debug(ANY, exc, ANY, 404),
        ])

    @patch('normalizer.pyramid_commons._pyramid_commons.LOGGER')
    def test_HTTPException_server_error(self, LOGGER):
        exc = HTTPInternalServerError()
        http_exc = exc_to_http_exc(exc)
        self.assertIs(http_exc, exc)
        self.assertEqual(http_exc.code, 500)
        self.assertEqual(LOGGER.mock_calls, [
            call.error(ANY, exc, ANY, 500, exc_info=True),
        ])

    @patch('normalizer.pyramid_commons._pyramid_commons.LOGGER')
    def test_ParamValueCleaningError(self, LOGGER):
        errors = {'age': 'expected number', 'address': {'city': 'required string'}}
        exc = ParamValueCleaningError(errors)
        http_exc = exc_to_http_exc(exc)
        self.assertIsInstance(http_exc, HTTPBadRequest)
        self.assertEqual(http_exc.code, 400)
        self.assertEqual(http_exc.content_type, 'application/json')
        self.assertEqual(http_exc.json_body, {
            'message': exc.public_message,
            'errors': errors,
        })
        self.assertEqual(LOGGER.mock_calls, [
            call.debug(ANY, exc, ANY),
        ])

    @patch('normalizer.pyramid_commons._pyramid_commons.LOGGER')
    def test_ParamCleaningError(self, LOGGER):
        exc = ParamCleaningError()
        http_exc = exc_to_http_exc(exc)
        self.assertIsInstance(http_exc, HTTPBadRequest)
        self.assertEqual(http_exc.json_body, {'message': 'Invalid parameter(s).'})
        self.assertEqual(LOGGER.mock_calls, [
            call.debug(ANY, exc, ANY),
        ])

    @patch('normalizer.pyramid_commons._pyramid_commons.LOGGER')
    def test_DataAPIError_with_custom_message(self, LOGGER):
        exc = DataAPIError(public_message='FOO')
        http_exc = exc_to_http_exc(exc)
        self.assertIsInstance(http_exc, HTTPServerError)
        self.assertEqual(http_exc.code, 500)
        self.assertEqual(http_exc.detail, 'FOO')
        self.assertEqual(LOGGER.mock_calls, [
            call.error(ANY, exc, ANY, exc_info=True),
        ])

    @patch('normalizer.pyramid_commons._pyramid_commons.LOGGER')
    def test_DataAPIError_with_default_message(self, LOGGER):
        exc = DataAPIError()
        http_exc = exc_to_http_exc(exc)
        self.assertIsInstance(http_exc, HTTPServerError)
        self.assertIsNone(http_exc.detail)

    @patch('normalizer.pyramid_commons._pyramid_commons.LOGGER')
    def test_other_exception(self, LOGGER):
        exc = ZeroDivisionError()
        http_exc = exc_to_http_exc(exc)
        self.assertIsInstance(http_exc, HTTPServerError)
        self.assertEqual(http_exc.code, 500)
        self.assertIsNone(http_exc.detail)
        self.assertEqual(LOGGER.mock_calls, [
            call.error(ANY, exc, exc_info=True),
        ])


class Test_exception_view(unittest.TestCase):

    @patch('normalizer.pyramid_commons._pyramid_commons.LOGGER')
    def test(self, LOGGER):
        http_exc = exception_view(ParamValueCleaningError({'a': 'expected date'}),
                                  Request.blank('/'))
        self.assertIsInstance(http_exc, HTTPBadRequest)


class Test_includeme(unittest.TestCase):

    def test(self):
        config = MagicMock()
        includeme(config)
        self.assertEqual(config.mock_calls, [
            call.add_view(view=exception_view, context=ParamCleaningError),
        ])


class Test_request_params_dict(unittest.TestCase):

    def test_query_params(self):
        request = Request.blank('/?age=42&lang=pt&lang=en&empty=')
        self.assertEqual(request_params_dict(request), {
            'age': '42',
            'lang': ['pt', 'en'],
            'empty': '',
        })

    def test_form_params(self):
        request = Request.blank('/', POST={'age': '42'})
        self.assertEqual(request_params_dict(request), {'age': '42'})

    def test_plain_dict_params(self):
        request = MagicMock(content_type=None, params={'age': '42'})
        self.assertEqual(request_params_dict(request), {'age': '42'})

    def test_json_body(self):
        request = Request.blank(
            '/',
            method='POST',
            content_type='application/json',
            body=b'{"age": 42, "address": {"city": "Warsaw"}, "tags": null}')
        self.assertEqual(request_params_dict(request), {
            'age': 42,
            'address': {'city': 'Warsaw'},
            'tags': None,
        })

    def test_json_body_not_valid(self):
        request = Request.blank(
            '/',
            method='POST',
            content_type='application/json',
            body=b'{"age": ')
        with self.assertRaises(ParamCleaningError):
            request_params_dict(request)

    def test_json_body_not_an_object(self):
        request = Request.blank(
            '/',
            method='POST',
            content_type='application/json',
            body=b'[1, 2]')
        with self.assertRaises(ParamCleaningError):
            request_params_dict(request)


class Test_with_normalized_params(unittest.TestCase):

    def setUp(self):
        self.view_mock = MagicMock(return_value=sen.response)

        @with_normalized_params({'age': 'number', 'langs': ['string']})
        def view(request, params):
            return self.view_mock(request, params)

        self.view = view

    def test_success(self):
        request = Request.blank('/?age=42&langs=pt&langs=en&other=x')
        response = self.view(request)
        self.assertIs(response, sen.response)
        self.assertEqual(self.view_mock.mock_calls, [
            call(request, {'age': 42, 'langs': ['pt', 'en']}),
        ])

    @patch('normalizer.pyramid_commons._pyramid_commons.LOGGER')
    def test_failure(self, LOGGER):
        request = Request.blank('/?age=old')
        with self.assertRaises(HTTPBadRequest) as cm:
            self.view(request)
        self.assertEqual(cm.exception.json_body, {
            'message': 'Problem with value of parameter "age" (expected number).',
            'errors': {'age': 'expected number'},
        })
        self.assertIsInstance(cm.exception.__cause__, ParamValueCleaningError)
        self.assertEqual(self.view_mock.mock_calls, [])

    @patch('normalizer.pyramid_commons._pyramid_commons.LOGGER')
    def test_json_body_not_valid(self, LOGGER):
        request = Request.blank(
            '/',
            method='POST',
            content_type='application/json',
            body=b'not json')
        with self.assertRaises(HTTPBadRequest) as cm:
            self.view(request)
        self.assertEqual(cm.exception.json_body,
                         {'message': 'Request body is not valid JSON.'})
        self.assertEqual(self.view_mock.mock_calls, [])

    def test_schema_subclass(self):
        class MySchema(Schema):
            born = DateField(required=True)

        @with_normalized_params(MySchema)
        def view(request, params):
            return params

        self.assertEqual(view(Request.blank('/?born=2020-12-30')),
                         {'born': datetime.date(2020, 12, 30)})

    def test_illegal_schema(self):
        with self.assertRaises(SchemaError):
            with_normalized_params(['age'])
