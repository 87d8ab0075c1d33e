# Copyright (c) 2020-2025 NASK. All rights reserved.


import functools

from pyramid.httpexceptions import (
    HTTPException,
    HTTPBadRequest,
    HTTPServerError,
)

from normalizer.class_helpers import is_mapping
from normalizer.encoding_helpers import ascii_str
from normalizer.exceptions import (
    DataAPIError,
    ParamCleaningError,
    ParamValueCleaningError,
)
from normalizer.log_helpers import get_logger
from normalizer.schema import (
    as_schema,
    clean_params,
)


LOGGER = get_logger(__name__)


JSON_CONTENT_TYPE = 'application/json'



#
# Helper functions

def exc_to_http_exc(exc):
    """
    Takes any :exc:`~exceptions.Exception` instance, returns a
    :exc:`pyramid.httpexceptions.HTTPException` instance.

    For :exc:`~normalizer.exceptions.ParamCleaningError` it is an
    :exc:`~pyramid.httpexceptions.HTTPBadRequest` whose body is a JSON
    object: ``{"message": <public message>}`` -- plus, if the error
    record is available, ``"errors": <the error record>``.
    """
    if isinstance(exc, HTTPException):
        code = getattr(exc, 'code', None)
        if isinstance(code, int) and 200 <= code < 500:
            LOGGER.debug(
                'HTTPException: %r ("%s", code: %s)',
                exc, ascii_str(exc), code)
        else:
            LOGGER.error(
                'HTTPException: %r ("%s", code: %r)',
                exc, ascii_str(exc), code,
                exc_info=True)
        http_exc = exc
    elif isinstance(exc, ParamCleaningError):
        LOGGER.debug(
            'Request parameters not valid: %r (public message: "%s")',
            exc, ascii_str(exc.public_message))
        json_body = {'message': exc.public_message}
        if isinstance(exc, ParamValueCleaningError):
            json_body['errors'] = exc.errors
        http_exc = HTTPBadRequest(content_type=JSON_CONTENT_TYPE,
                                  json_body=json_body)
    else:
        if isinstance(exc, DataAPIError):
            LOGGER.error(
                '%r (public message: "%s")',
                exc, ascii_str(exc.public_message),
                exc_info=True)
            public_message = (
                None
                if exc.public_message == DataAPIError.default_public_message
                else exc.public_message)
        else:
            LOGGER.error(
                'Non-HTTPException/DataAPIError exception: %r',
                exc,
                exc_info=True)
            public_message = None
        http_exc = HTTPServerError(public_message)
    return http_exc


def exception_view(exc, request):
    """
    A *Pyramid* exception view (see: :func:`includeme`).
    """
    http_exc = exc_to_http_exc(exc)
    assert isinstance(http_exc, HTTPException)
    return http_exc


def request_params_dict(request):
    """
    Get a new :class:`dict` of the request's *raw* parameters.

    If the request's content type is ``application/json``, the body,
    which must be a JSON object, is taken.  Otherwise the query/form
    parameters are taken: a parameter given once is mapped to its
    (string) value; a parameter given multiple times -- to the
    :class:`list` of its values.

    Raises:
        :exc:`~normalizer.exceptions.ParamCleaningError` if the JSON
        body is not valid or is not an object.
    """
    if getattr(request, 'content_type', None) == JSON_CONTENT_TYPE:
        try:
            json_body = request.json_body
        except ValueError as exc:
            raise ParamCleaningError(
                public_message='Request body is not valid JSON.') from exc
        if not is_mapping(json_body):
            raise ParamCleaningError(
                public_message='Request body should be a JSON object.')
        return dict(json_body)
    params = request.params
    if hasattr(params, 'dict_of_lists'):
        return {
            key: (values[0] if len(values) == 1 else values)
            for key, values in params.dict_of_lists().items()}
    return dict(params)


def with_normalized_params(schema):
    """
    A decorator for *Pyramid* view callables.

    Makes the decorated view be called with two arguments: the
    request and the :class:`dict` of the request's parameters
    normalized according to the given schema (a
    :class:`~normalizer.schema.Schema` instance/subclass or a
    mapping).  If the parameters cannot be cleaned, the
    :exc:`~pyramid.httpexceptions.HTTPBadRequest` produced by
    :func:`exc_to_http_exc` is raised.

    The schema is built once, when the decorator is applied.
    """
    schema = as_schema(schema)

    def decorator(view):
        @functools.wraps(view)
        def wrapper(request):
            try:
                params = clean_params(request_params_dict(request), schema)
            except ParamCleaningError as exc:
                raise exc_to_http_exc(exc) from exc
            return view(request, params)
        return wrapper

    return decorator



#
# Application configuration

def includeme(config):
    """
    To be used with ``config.include('normalizer.pyramid_commons')``:
    registers :func:`exception_view` for parameter cleaning errors.
    """
    config.add_view(view=exception_view, context=ParamCleaningError)
