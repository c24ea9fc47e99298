"""Checked conversions between native values and ledger values.

Numbers are range-checked against the integer widths the ledger uses.
Loosely typed values travel as :class:`Val`, a value tagged with its
:class:`ValKind`. A conversion that cannot be made raises
:class:`ConversionError`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any

from ledgerlab.host import Address, symbol

SYMBOL_TEXT_MAX = 32
ADDRESS_TEXT_LEN = 56

_U32_MAX = 2**32 - 1
_U64_MAX = 2**64 - 1
_I32_MIN, _I32_MAX = -(2**31), 2**31 - 1
_I64_MIN, _I64_MAX = -(2**63), 2**63 - 1
_I128_MIN, _I128_MAX = -(2**127), 2**127 - 1


class ConversionErrorCode(IntEnum):
    """Codes for failed conversions."""

    NUMERIC_OVERFLOW = 1
    INVALID_STRING_FORMAT = 2
    UNSUPPORTED_CONVERSION = 3
    COLLECTION_TOO_LARGE = 4
    INVALID_ADDRESS = 5


def _camel(name: str) -> str:
    return "".join(part.capitalize() for part in name.lower().split("_"))


class ConversionError(Exception):
    """A conversion that could not be made, carrying a :class:`ConversionErrorCode`."""

    def __init__(self, code: ConversionErrorCode) -> None:
        self.code = ConversionErrorCode(code)
        super().__init__(_camel(self.code.name))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConversionError):
            return NotImplemented
        return self.code == other.code

    def __hash__(self) -> int:
        return hash(self.code)


class ValKind(Enum):
    """The type tag of a :class:`Val`."""

    BOOL = "bool"
    U32 = "u32"
    I32 = "i32"
    U64 = "u64"
    I64 = "i64"
    I128 = "i128"
    STRING = "string"
    SYMBOL = "symbol"
    BYTES = "bytes"
    ADDRESS = "address"
    VEC = "vec"


_INT_RANGES = {
    ValKind.U32: (0, _U32_MAX),
    ValKind.I32: (_I32_MIN, _I32_MAX),
    ValKind.U64: (0, _U64_MAX),
    ValKind.I64: (_I64_MIN, _I64_MAX),
    ValKind.I128: (_I128_MIN, _I128_MAX),
}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_int(name: str, value: Any, kind: ValKind) -> int:
    low, high = _INT_RANGES[kind]
    if not _is_int(value) or not low <= value <= high:
        raise ValueError(f"{name} must be a {kind.value} integer between {low} and {high}")
    return value


@dataclass(frozen=True)
class Val:
    """A value tagged with its ledger type."""

    kind: ValKind
    value: Any = field(default=None)

    def __post_init__(self) -> None:
        kind = ValKind(self.kind)
        object.__setattr__(self, "kind", kind)
        value = self.value
        if kind in _INT_RANGES:
            _check_int("value", value, kind)
        elif kind is ValKind.BOOL:
            if not isinstance(value, bool):
                raise ValueError("a bool value must be True or False")
        elif kind is ValKind.STRING:
            if not isinstance(value, str):
                raise ValueError("a string value must be a str")
        elif kind is ValKind.SYMBOL:
            if not isinstance(value, str):
                raise ValueError("a symbol value must be a str")
            symbol(value)
        elif kind is ValKind.BYTES:
            if not isinstance(value, (bytes, bytearray, memoryview)):
                raise ValueError("a bytes value must be bytes-like")
            object.__setattr__(self, "value", bytes(value))
        elif kind is ValKind.ADDRESS:
            if not isinstance(value, Address):
                raise ValueError("an address value must be an Address")
        elif kind is ValKind.VEC:
            items = tuple(value)
            if not all(isinstance(item, Val) for item in items):
                raise ValueError("a vec value must hold only Val items")
            object.__setattr__(self, "value", items)


@dataclass(frozen=True)
class UserData:
    """A user record built from validated inputs."""

    id: int
    name: str
    balance: int
    active: bool


@dataclass
class Config:
    """Configuration decoded from a map of loosely typed values."""

    max_users: int
    fee_rate: int
    admin: Address
    features: list[str]


def _text_len(text: str) -> int:
    return len(text.encode("utf-8"))


def convert_numbers(value: int, target_type: int) -> int:
    """Check ``value`` fits the target type (1=u32, 2=i64, 3=u128) and return it."""
    _check_int("value", value, ValKind.I128)
    if target_type == 1:
        low, high = 0, _U32_MAX
    elif target_type == 2:
        low, high = _I64_MIN, _I64_MAX
    elif target_type == 3:
        low, high = 0, _I128_MAX
    else:
        raise ConversionError(ConversionErrorCode.UNSUPPORTED_CONVERSION)
    if not low <= value <= high:
        raise ConversionError(ConversionErrorCode.NUMERIC_OVERFLOW)
    return value


def convert_strings(text: str, to_symbol: bool) -> tuple[str, str]:
    """Return a string and a symbol form of the demo text ``hello``.

    With ``to_symbol`` the input string is returned alongside the symbol;
    otherwise the string is rebuilt from the symbol's text.
    """
    sym = symbol("hello")
    if to_symbol:
        return text, sym
    return "hello", sym


def convert_collections(values: Iterable[int]) -> list[int]:
    """Widen a sequence of 32-bit integers to 64-bit integers."""
    return [_check_int("element", value, ValKind.I32) for value in values]


def safe_conversions(val: Val, expected_type: int) -> tuple[bool, int]:
    """Try to read ``val`` as u32 (1), i64 (2) or bool (3).

    Returns ``(True, value)`` on success, ``(False, 0)`` on a type mismatch
    and ``(False, -1)`` for an unknown ``expected_type``.
    """
    wanted = {1: ValKind.U32, 2: ValKind.I64, 3: ValKind.BOOL}.get(expected_type)
    if wanted is None:
        return False, -1
    if val.kind is not wanted:
        return False, 0
    return True, int(val.value)


def create_user_data(user_id: int, name: str, balance: int, active: bool) -> UserData:
    """Build a :class:`UserData`, rejecting long names and negative balances."""
    _check_int("user_id", user_id, ValKind.U64)
    _check_int("balance", balance, ValKind.I128)
    if _text_len(name) > SYMBOL_TEXT_MAX:
        raise ConversionError(ConversionErrorCode.INVALID_STRING_FORMAT)
    if balance < 0:
        raise ConversionError(ConversionErrorCode.NUMERIC_OVERFLOW)
    return UserData(user_id, name, balance, bool(active))


def _field(val_data: Mapping[str, Val], name: str) -> Val:
    try:
        return val_data[name]
    except KeyError:
        raise ConversionError(ConversionErrorCode.UNSUPPORTED_CONVERSION) from None


def _expect(val: Val, kind: ValKind, code: ConversionErrorCode) -> Any:
    if val.kind is not kind:
        raise ConversionError(code)
    return val.value


def convert_val_to_config(val_data: Mapping[str, Val]) -> Config:
    """Decode a :class:`Config` from a map keyed by field name."""
    max_users = _expect(
        _field(val_data, "max_users"), ValKind.U32, ConversionErrorCode.NUMERIC_OVERFLOW
    )
    fee_rate = _expect(
        _field(val_data, "fee_rate"), ValKind.U64, ConversionErrorCode.NUMERIC_OVERFLOW
    )
    admin = _expect(
        _field(val_data, "admin"), ValKind.ADDRESS, ConversionErrorCode.INVALID_ADDRESS
    )
    items = _expect(
        _field(val_data, "features"), ValKind.VEC, ConversionErrorCode.UNSUPPORTED_CONVERSION
    )
    features = [
        _expect(item, ValKind.SYMBOL, ConversionErrorCode.UNSUPPORTED_CONVERSION)
        for item in items
    ]
    return Config(max_users, fee_rate, admin, features)


def convert_bytes_to_types(input_bytes) -> tuple[str, str, bytes]:
    """Return the demo text ``hello_world`` as string and symbol, with the input bytes."""
    if isinstance(input_bytes, str) or not isinstance(
        input_bytes, (bytes, bytearray, memoryview)
    ):
        raise TypeError("input_bytes must be a bytes-like value")
    return "hello_world", symbol("hello_world"), bytes(input_bytes)


def validate_and_convert(raw_value: str, value_type: int) -> str:
    """Check ``raw_value`` as a number (1), symbol (2) or address (3) and return it."""
    length = _text_len(raw_value)
    if value_type == 1:
        if length == 0:
            raise ConversionError(ConversionErrorCode.INVALID_STRING_FORMAT)
    elif value_type == 2:
        if length > SYMBOL_TEXT_MAX:
            raise ConversionError(ConversionErrorCode.INVALID_STRING_FORMAT)
    elif value_type == 3:
        if length != ADDRESS_TEXT_LEN:
            raise ConversionError(ConversionErrorCode.INVALID_ADDRESS)
    else:
        raise ConversionError(ConversionErrorCode.UNSUPPORTED_CONVERSION)
    return raw_value


def batch_convert_numbers(values: Iterable[str]) -> list[int]:
    """Map each string to a number by its length, skipping the rest.

    Three-byte strings give 123, four-byte strings give -456; any other
    string, including the empty one, is skipped.
    """
    by_length = {3: 123, 4: -456}
    results = []
    for text in values:
        number = by_length.get(_text_len(text))
        if number is not None:
            results.append(number)
    return results


def sum_different_types(input_u32: int, input_i64: int) -> int:
    """Add an unsigned 32-bit and a signed 64-bit integer."""
    return _check_int("input_u32", input_u32, ValKind.U32) + _check_int(
        "input_i64", input_i64, ValKind.I64
    )


def val_roundtrip(value: int) -> int:
    """Wrap a u32 in a :class:`Val` and read it back."""
    val = Val(ValKind.U32, value)
    ok, result = safe_conversions(val, 1)
    return result if ok else 0