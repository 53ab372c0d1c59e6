"""Runtime type predicates for values of unknown origin.

Configuration values reach the SDK from TOML files, environment variables and
deserialized JSON, so nothing about their shape can be assumed. The predicates
in this module classify such values. Every predicate is total: it accepts any
object and returns a boolean, it never raises.

Python has a single "no value" object, ``None``. The predicates need to tell
an explicit null apart from a value that was never provided at all, so this
module defines the ``UNDEFINED`` sentinel for the latter. ``get_value`` returns
it when a key is missing from a mapping.
"""
import math
from typing import Any, Mapping


class Undefined:
    """The type of the ``UNDEFINED`` sentinel.

    There is only ever one instance. It is falsy and compares equal only to
    itself.
    """

    _instance = None

    def __new__(cls) -> "Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __copy__(self) -> "Undefined":
        return self

    def __deepcopy__(self, memo: Any) -> "Undefined":
        return self


UNDEFINED = Undefined()


def get_value(mapping: Mapping[str, Any], key: str) -> Any:
    """Reads a key from a mapping, returning ``UNDEFINED`` when it is absent.

    Args:
        mapping (Mapping[str, Any]): The mapping to read from.
        key (str): The key to look up.

    Returns:
        Any: The stored value (which may be ``None``), or ``UNDEFINED``.
    """
    try:
        return mapping[key]
    except (KeyError, TypeError):
        return UNDEFINED


def is_object(value: Any) -> bool:
    """Checks whether a value is a plain key/value mapping.

    Only instances of ``dict`` itself qualify. Subclasses of ``dict`` and
    instances of any other class, user-defined or not, are rejected.

    Args:
        value (Any): The value to check.

    Returns:
        bool: True if the value is a plain dict.
    """
    return type(value) is dict


def is_undefined(value: Any) -> bool:
    """Checks whether a value is the ``UNDEFINED`` sentinel.

    ``None`` is an explicit null and is not undefined.
    """
    return value is UNDEFINED


def is_string(value: Any) -> bool:
    """Checks whether a value is a string, including the empty string."""
    return isinstance(value, str)


def is_boolean(value: Any) -> bool:
    """Checks whether a value is one of the two boolean values."""
    return isinstance(value, bool)


def is_number(value: Any) -> bool:
    """Checks whether a value is a number other than NaN.

    Infinities are numbers. Booleans and numeric-looking strings are not.

    Args:
        value (Any): The value to check.

    Returns:
        bool: True if the value is an int or a non-NaN float.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not (isinstance(value, float) and math.isnan(value))


def is_integer(value: Any) -> bool:
    """Checks whether a value is a finite number with no fractional part.

    Floats that are mathematically integral, such as ``5.0``, are integers.
    The check works on the stored double, so a literal that rounds to an
    integral double is an integer too: ``5.0000000000000001`` is read as
    ``5.0``. ``5.000000000000001`` is a distinct double and is not.

    Args:
        value (Any): The value to check.

    Returns:
        bool: True if the value is a finite, integral number.
    """
    if not is_number(value):
        return False
    if isinstance(value, int):
        return True
    return math.isfinite(value) and value.is_integer()
