import pytest

from jsbind import JSBFunction, JSBPackage, Parameter


@pytest.fixture
def package():
    return JSBPackage("Atomic")


@pytest.fixture
def module(package):
    return package.create_module("Core")


@pytest.fixture
def make_function(package):
    """JSBFunction 팩토리: make_function("SetX", ["float"])"""

    def _make(name, params=(), ret=None, **flags):
        parameters = [
            Parameter(name=f"arg{i}", type=package.resolve_type(t))
            for i, t in enumerate(params)
        ]
        return_type = package.resolve_type(ret) if ret else None
        function = JSBFunction(name, return_type, parameters, **flags)
        if 'is_getter' not in flags and 'is_setter' not in flags:
            function.detect_accessor_role()
        return function

    return _make
