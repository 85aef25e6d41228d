"""
Test the cast registry. These converters must never raise.
"""
import math
from datetime import datetime, timezone, timedelta

import pytest

from inbox.models.casters import CASTERS, Missing, cast_to_int, cast_to_string, \
    cast_to_bool, cast_to_array, cast_from_array, cast_to_date, cast_from_date


def test_registry():
    assert set(CASTERS) == {'string', 'int', 'bool', 'array', 'date', 'const'}
    # None of the built-in types merge.
    assert all(caster.merge is None for caster in CASTERS.values())


@pytest.mark.parametrize('value,expected', [
    (None, None),
    ('abc', 'abc'),
    (5, '5'),
    (1.0, '1'),
    (1.5, '1.5'),
    (True, 'true'),
    (False, 'false'),
    (['a', 'b'], 'a,b'),
    ({'a': 1}, '[object Object]'),
])
def test_string(value, expected):
    assert cast_to_string(value) == expected
    assert CASTERS['string'].from_(value, None) == expected


@pytest.mark.parametrize('value,expected', [
    (12, 12),
    ('12', 12),
    (' 12 ', 12),
    ('0x10', 16),
    (3.9, 3),
    (-1, 2 ** 32 - 1),
    (2 ** 32 + 5, 5),
    (True, 1),
    (None, 0),
    ('', 0),
    ('abc', 0),
    ('1_000', 0),
    ('0x1_0', 0),
    (math.nan, 0),
    (math.inf, 0),
    ({'a': 1}, 0),
])
def test_int(value, expected):
    assert cast_to_int(value) == expected


@pytest.mark.parametrize('value,expected', [
    (None, False),
    (Missing, False),
    ('', False),
    (0, False),
    (0.0, False),
    (math.nan, False),
    ('0', True),
    ('false', True),
    (1, True),
    ([], True),
    ({}, True),
])
def test_bool(value, expected):
    assert cast_to_bool(value) is expected


def test_const():
    """
    The constant comes from the descriptor, the input is ignored.
    """
    class Info:
        constant = 'draft'

    caster = CASTERS['const']
    assert caster.to('message', Info()) == 'draft'
    assert caster.from_(None, Info()) == 'draft'


def test_array():
    items = ['a', 'b']
    assert cast_to_array(items) is items
    assert cast_to_array(('a', 'b')) == ['a', 'b']
    assert cast_to_array({'length': 2, '0': 'a', '1': 'b'}) == ['a', 'b']
    assert cast_to_array({'length': 1, 0: 'x'}) == ['x']
    assert cast_to_array(None) == []
    assert cast_to_array(42) == []

    assert cast_from_array(items) is items


def test_date_from_number():
    """
    Numbers are epoch seconds, and survive the round trip.
    """
    value = cast_to_date(1609459200)
    assert value == datetime(2021, 1, 1, tzinfo=timezone.utc)
    assert cast_from_date(value) == 1609459200

    assert cast_to_date(1609459200.7) == datetime(2021, 1, 1, tzinfo=timezone.utc)
    assert cast_from_date(1609459200) == 1609459200


def test_date_from_string():
    expected = datetime(2021, 1, 1, tzinfo=timezone.utc)
    assert cast_to_date('2021-01-01T00:00:00+00:00') == expected
    assert cast_to_date('2021-01-01T01:00:00+01:00') == expected
    assert cast_to_date('Fri, 01 Jan 2021 00:00:00 +0000') == expected
    assert cast_to_date('2021-01-01') == expected

    # Naive timestamps are UTC
    assert cast_to_date('2021-01-01T00:00:00') == expected

    assert cast_from_date('2021-01-01T00:00:00+00:00') == 1609459200


def test_date_objects():
    value = datetime(2021, 1, 1, tzinfo=timezone.utc)
    assert cast_to_date(value) is value

    class Arrowish:
        def to_date(self):
            return value

    assert cast_to_date(Arrowish()) is value

    # Naive datetimes are UTC
    assert cast_from_date(datetime(2021, 1, 1)) == 1609459200
    # Fractions are floored
    assert cast_from_date(value + timedelta(milliseconds=900)) == 1609459200

    class Timestamped:
        def timestamp(self):
            return 1609459200.5

    assert cast_from_date(Timestamped()) == 1609459200


@pytest.mark.parametrize('value', [
    'nonsense', True, {'a': 1}, object(),
])
def test_date_bad_input(value):
    """
    Values that are not dates become `Missing`, without raising.
    """
    assert cast_to_date(value) is Missing
    assert cast_from_date(value) is Missing


def test_date_null():
    assert cast_to_date(None) is None
    assert cast_from_date(None) is None
