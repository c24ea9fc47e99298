"""Recoverable errors versus panics for contract operations."""

from __future__ import annotations

from enum import IntEnum

from ledgerlab.host import Contract

_U64_MAX = 2**64 - 1
_I128_MIN = -(2**127)
_I128_MAX = 2**127 - 1


class ErrorCode(IntEnum):
    """Contract error codes."""

    INVALID_AMOUNT = 1
    INSUFFICIENT_BALANCE = 2
    UNAUTHORIZED = 3


class ContractError(Exception):
    """An expected, recoverable contract failure carrying an :class:`ErrorCode`."""

    def __init__(self, code: ErrorCode) -> None:
        self.code = ErrorCode(code)
        super().__init__(self.code.name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ContractError):
            return NotImplemented
        return self.code == other.code

    def __hash__(self) -> int:
        return hash(self.code)


def _check_u64(name: str, value: int) -> None:
    if not 0 <= value <= _U64_MAX:
        raise ValueError(f"{name} must fit in an unsigned 64-bit integer")


def _check_i128(name: str, value: int) -> None:
    if not _I128_MIN <= value <= _I128_MAX:
        raise ValueError(f"{name} must fit in a signed 128-bit integer")


def transfer(amount: int, balance: int) -> int:
    """Return the balance left after moving ``amount``; raise on bad input."""
    _check_u64("amount", amount)
    _check_u64("balance", balance)
    if amount == 0:
        raise ContractError(ErrorCode.INVALID_AMOUNT)
    if amount > balance:
        raise ContractError(ErrorCode.INSUFFICIENT_BALANCE)
    return balance - amount


def transfer_panic(amount: int, balance: int) -> int:
    """Like :func:`transfer`, but aborts with an unstructured failure."""
    _check_u64("amount", amount)
    _check_u64("balance", balance)
    if amount == 0:
        raise RuntimeError("invalid amount")
    if amount > balance:
        raise RuntimeError("insufficient balance")
    return balance - amount


def divide(a: int, b: int) -> int:
    """Integer division truncating toward zero; a zero divisor is an error."""
    _check_i128("a", a)
    _check_i128("b", b)
    if b == 0:
        raise ContractError(ErrorCode.INVALID_AMOUNT)
    if a == _I128_MIN and b == -1:
        raise OverflowError("attempt to divide with overflow")
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


class ErrorHandlingContract(Contract):
    """Reads state whose invariant, if broken, aborts the invocation."""

    def get_verified_state(self, key: int) -> int:
        """Return the stored value for ``key`` (0 if unset), checking it is at most 1000."""
        value = self.storage.instance.get(key, 0)
        if value > 1000:
            raise RuntimeError("invariant violated: state corrupted")
        return value