"""
The cast registry: named, bidirectional converters between JSON values and
model attribute values.

Every converter is called as `convert(value, descriptor)`. They are lenient
on purpose: bad input degrades to an empty value (`None`, `0`, `False`,
`Missing`) and never raises.

Most of the coercions mimic how the Inbox web service (and its JavaScript
clients) treat values: ints are wrapped to unsigned 32 bit, bools follow
JavaScript truthiness, and dates travel as epoch seconds.
"""

import math
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

import attr
import marshmallow
from marshmallow import ValidationError, fields


Missing = marshmallow.missing


# Tried in order when a date arrives as a string.
DATE_STRING_FIELDS = (
    fields.DateTime(format='iso'),
    fields.DateTime(format='rfc'),
    fields.Date(format='iso'),
)


@attr.s(frozen=True)
class Caster:
    to: Callable = attr.ib()
    from_: Callable = attr.ib()
    merge: Optional[Callable] = attr.ib(default=None)


def is_number(value) -> bool:
    # bool is a subclass of int, but never a number on the wire.
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def to_number(value) -> float:
    """JavaScript's ToNumber, restricted to the values JSON can hold."""
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if is_number(value):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        # Python accepts digit separators, JavaScript does not.
        if '_' in text:
            return math.nan
        if text[:2].lower() in ('0x', '0o', '0b'):
            try:
                return int(text, 0)
            except ValueError:
                return math.nan
        try:
            return float(text)
        except ValueError:
            return math.nan
    if isinstance(value, list):
        if not value:
            return 0
        if len(value) == 1:
            return to_number(value[0])
    return math.nan


def to_uint32(value) -> int:
    """JavaScript's `value >>> 0`."""
    number = to_number(value)
    if isinstance(number, float):
        if math.isnan(number) or math.isinf(number):
            return 0
        number = int(number)
    return number % 2 ** 32


def is_truthy(value) -> bool:
    if value is None or value is Missing:
        return False
    if isinstance(value, str):
        return value != ''
    if isinstance(value, float) and math.isnan(value):
        return False
    if isinstance(value, (int, float)):
        return value != 0
    # Objects, including empty lists and dicts, are always truthy in JS.
    return True


def to_text(value) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        if math.isnan(value):
            return 'NaN'
        if math.isinf(value):
            return 'Infinity' if value > 0 else '-Infinity'
        if value.is_integer():
            return str(int(value))
    if isinstance(value, (list, tuple)):
        return ','.join('' if v is None else to_text(v) for v in value)
    if isinstance(value, Mapping):
        return '[object Object]'
    return str(value)


def parse_datetime(text: str) -> Optional[datetime]:
    for field in DATE_STRING_FIELDS:
        try:
            value = field.deserialize(text)
        except ValidationError:
            continue
        if not isinstance(value, datetime):
            value = datetime(value.year, value.month, value.day)
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value
    return None


def epoch_seconds(value: Any):
    """Floored epoch seconds of anything with a numeric `timestamp()`."""
    if isinstance(value, datetime) and value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    timestamp = getattr(value, 'timestamp', None)
    if not callable(timestamp):
        return Missing
    seconds = timestamp()
    if not is_number(seconds) or math.isnan(seconds) or math.isinf(seconds):
        return Missing
    return to_uint32(math.floor(seconds))


def cast_to_string(value, info=None):
    if value is None:
        return None
    return to_text(value)


def cast_to_int(value, info=None):
    return to_uint32(value)


def cast_to_bool(value, info=None):
    return is_truthy(value)


def cast_to_const(value, info):
    return info.constant


def cast_to_array(value, info=None):
    if isinstance(value, list):
        return value
    if isinstance(value, (tuple, str)):
        return list(value)
    if isinstance(value, Mapping):
        # An array-like object: {"length": 2, "0": "a", "1": "b"}
        length = to_uint32(value.get('length'))
        return [value.get(i, value.get(str(i))) for i in range(length)]
    if hasattr(value, '__len__') and hasattr(value, '__getitem__'):
        try:
            return [value[i] for i in range(len(value))]
        except (KeyError, IndexError, TypeError):
            return []
    return []


def cast_from_array(value, info=None):
    return value


def cast_to_date(value, info=None):
    if value is None:
        return None
    if is_number(value):
        return datetime.fromtimestamp(to_uint32(value), tz=timezone.utc)
    if isinstance(value, str):
        parsed = parse_datetime(value)
        return Missing if parsed is None else parsed
    if isinstance(value, datetime):
        return value
    to_date = getattr(value, 'to_date', None)
    if callable(to_date):
        converted = to_date()
        if isinstance(converted, datetime):
            return converted
    return Missing


def cast_from_date(value, info=None):
    if value is None:
        return None
    if is_number(value):
        return to_uint32(value)
    if isinstance(value, str):
        parsed = parse_datetime(value)
        return Missing if parsed is None else epoch_seconds(parsed)
    if isinstance(value, bool):
        return Missing
    return epoch_seconds(value)


CASTERS: Dict[str, Caster] = {
    'string': Caster(to=cast_to_string, from_=cast_to_string),
    'int': Caster(to=cast_to_int, from_=cast_to_int),
    'bool': Caster(to=cast_to_bool, from_=cast_to_bool),
    'array': Caster(to=cast_to_array, from_=cast_from_array),
    'date': Caster(to=cast_to_date, from_=cast_from_date),
    'const': Caster(to=cast_to_const, from_=cast_to_const),
}
