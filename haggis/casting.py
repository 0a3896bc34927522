"""
Text to value casting for argument tokens.

Every non-flag token of the argument vector goes through cast() before it is
attached to an instruction. The policy is deliberately small:

- empty or whitespace-only text  → None
- "true" / "false" (any casing)   → True / False
- numeric text                    → int when integral, float otherwise
- anything else                   → the original string, unchanged

Numeric text
- decimal: optional sign, digits with an optional fraction and exponent
  ("3", "-3.5", ".5", "1.", "1e3").
- prefixed integers: "0x1f", "0o17", "0b101" (unsigned).
- "Infinity" / "+Infinity" / "-Infinity".
Anything else that Python's float() would accept ("nan", "inf", "1_000") is
kept as a string.

Examples
    >>> [cast(x) for x in ("true", "FALSE", "3", "3.5", "", "  ", "hello")]
    [True, False, 3, 3.5, None, None, 'hello']
    >>> cast("1e3"), cast("0x10"), cast("2.0")
    (1000, 16, 2)
"""
import math
import re

_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER = re.compile(r"[+-]?\d+")
_PREFIXED = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")
_INFINITY = re.compile(r"[+-]?Infinity")


def _number(text):
    """
    Parse trimmed text as a number, or return None when it is not numeric.
    """
    if _INTEGER.fullmatch(text):
        try:
            return int(text)
        except ValueError:
            # past the int/str digit limit
            return float(text)
    if _PREFIXED.fullmatch(text):
        return int(text, 0)
    if _INFINITY.fullmatch(text):
        return float(text)
    if _DECIMAL.fullmatch(text):
        number = float(text)
        if math.isfinite(number) and number.is_integer():
            return int(number)
        return number
    return None


def cast(text, /):
    """
    Convert one argument token to a typed value.

    parameters
    - text: str | None
      raw token as found in the argument vector (None is treated as empty).

    returns
    - None | bool | int | float | str (see module docstring for the policy).

    errors
    - TypeError when text is neither a string nor None.
    """
    if text is None:
        return None
    if not isinstance(text, str):
        raise TypeError("cast() argument must be a string")

    if not (stripped := text.strip()):
        return None

    match stripped.lower():
        case "true":
            return True
        case "false":
            return False

    if (number := _number(stripped)) is not None:
        return number

    return text


__all__ = (
    "cast",
)
