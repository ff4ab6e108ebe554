"""Product record and the typed request bodies the HTTP layer decodes.

Request fields carry an explicit presence tag: a key that is absent from the
JSON body is ``MISSING``, while a key sent as ``null`` is ``None``. Create and
update both depend on telling those apart.
"""
import math
import re
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Union


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()

_LEADING_INT = re.compile(r"\s*([+-]?)(?:0[xX]([0-9a-fA-F]*)|([0-9]+))")
_DECIMAL = re.compile(r"[+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")
_PREFIXED = {"0x": 16, "0X": 16, "0o": 8, "0O": 8, "0b": 2, "0B": 2}


@dataclass
class Product:
    id: int
    name: Any
    price: Any
    stock: Any

    def to_dict(self) -> Dict[str, Any]:
        # asdict deep-copies, so callers never share state with the store
        return asdict(self)


def _field(body: Dict[str, Any], key: str) -> Any:
    return body[key] if key in body else MISSING


@dataclass(frozen=True)
class _ProductFields:
    name: Any = MISSING
    price: Any = MISSING
    stock: Any = MISSING

    @classmethod
    def from_json(cls, body: Any):
        if not isinstance(body, dict):
            body = {}
        return cls(_field(body, "name"), _field(body, "price"), _field(body, "stock"))


class ProductDraft(_ProductFields):
    """Body of a create request."""

    def is_complete(self) -> bool:
        return not is_blank(self.name) and self.price is not MISSING and self.stock is not MISSING


class ProductPatch(_ProductFields):
    """Body of an update request. Only supplied fields are applied."""


def is_blank(value: Any) -> bool:
    """Whether a name counts as not provided.

    Absent, null, false, "" and numeric zero are blank. Everything else,
    including empty lists and objects, is a provided value.
    """
    if value is MISSING or value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)):
        return value == 0 or math.isnan(value)
    return False


def parse_int(text: str) -> Optional[int]:
    """Read the leading integer of a path segment.

    "2abc" -> 2, " 7" -> 7, "1.9" -> 1, "0x1A" -> 26, "abc" -> None.
    """
    match = _LEADING_INT.match(text)
    if match is None:
        return None
    sign, hex_digits, digits = match.groups()
    if hex_digits is not None:
        if not hex_digits:
            return None
        number = int(hex_digits, 16)
    else:
        number = int(digits)
    return -number if sign == "-" else number


def _js_string(value: Any) -> str:
    # string form used when an array is compared with a number
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return repr(int(value)) if value.is_integer() else repr(value)
    if isinstance(value, list):
        return ",".join(_js_string(item) for item in value)
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


def _string_to_number(text: str) -> Optional[Union[int, float]]:
    text = text.strip()
    if not text:
        return 0
    base = _PREFIXED.get(text[:2])
    if base is not None:
        digits = text[2:]
        if not (digits.isascii() and digits.isalnum()):
            return None
        try:
            return int(digits, base)
        except ValueError:
            return None
    if _DECIMAL.fullmatch(text) is None:
        return None
    return float(text.replace("Infinity", "inf"))


def as_number(value: Any) -> Optional[Union[int, float]]:
    """Numeric value of a stored price as a range comparison sees it.

    null and [] are 0, [50] and "50" are 50, "0x10" is 16. Objects and
    strings that are not numbers have no value (None) and never match.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return None if math.isnan(value) else value
    if isinstance(value, str):
        return _string_to_number(value)
    if isinstance(value, list):
        return _string_to_number(_js_string(value))
    return None
