"""Tests for core.naming.sanitizer."""

import re

import pytest

from core.naming.sanitizer import FALLBACK_NAME, sanitize


SAFE_RE = re.compile(r"^[A-Za-z0-9_-]*$")


@pytest.mark.parametrize(
    "name, expected",
    [
        ("my_resource", "my_resource"),
        ("esx-menu", "esx-menu"),
        ("qb.core", "qb_core"),
        ("../../etc/passwd", "______etc_passwd"),
        ("a b\tc", "a_b_c"),
        ("ünïcode", "_n_code"),
    ],
)
def test_replaces_unsafe_characters(name, expected):
    assert sanitize(name) == expected


@pytest.mark.parametrize("name", ["x", "hello world", "💥💥", "a/b\\c:d", "..", "%2e%2e"])
def test_output_is_safe_and_same_length(name):
    out = sanitize(name)
    assert SAFE_RE.match(out)
    assert len(out) == len(name)


@pytest.mark.parametrize("value", [None, 123, "", [], {"a": 1}, 1.5])
def test_non_strings_map_to_fallback(value):
    assert sanitize(value) == FALLBACK_NAME


def test_collisions_are_accepted():
    assert sanitize("a.b") == sanitize("a b") == "a_b"
