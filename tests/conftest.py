"""pytest configuration and shared fixtures."""

import pytest


@pytest.fixture
def one_depth_object():
    """Flat document with three numeric leaves."""
    return {
        "a": 0,
        "b": 1,
        "c": 2,
    }


@pytest.fixture
def nested_object():
    """Document mixing nested dicts, lists and scalars."""
    return {
        "a": 0,
        "b": 1,
        "c": {
            "foo": {
                "bar": [1, 2, 3, {
                    "value": {
                        "foo": "bar",
                    },
                }],
            },
        },
        "d": 3,
    }


@pytest.fixture
def recursive_object():
    """Same-shaped dicts nested four levels deep under ``nested``."""
    return {
        "foo": 0,
        "nested": {
            "depth": 1,
            "nested": {
                "depth": 2,
                "nested": {
                    "depth": 3,
                    "nested": {
                        "depth": 4,
                    },
                },
            },
        },
        "bar": 1,
    }
