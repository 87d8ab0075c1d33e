# Copyright (c) 2020-2025 NASK. All rights reserved.

# doctests of all *normalizer* submodules are to be
# run with *pytest* (using its `--doctest-modules` option);
# the standard *unittest*'s discovery machinery is not supported

def load_tests(loader, tests, *args):  # noqa
    raise RuntimeError(
        '*unittest*-specific discovery mechanism is '
        'not supported, use *pytest* instead!')


# dissuade *pytest* from using that function
# (note that pytest has its own ways to discover doctests)

load_tests.__test__ = False
