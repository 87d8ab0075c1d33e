# Copyright (c) 2020-2025 NASK. All rights reserved.

"""
Helpers that make it easy to use the *normalizer* library in
*Pyramid*-based web applications.
"""


from normalizer.pyramid_commons._pyramid_commons import (
    exc_to_http_exc,
    exception_view,
    request_params_dict,
    with_normalized_params,
    includeme,
)


__all__ = [
    'exc_to_http_exc',
    'exception_view',
    'request_params_dict',
    'with_normalized_params',
    'includeme',
]
