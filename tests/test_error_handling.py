import pytest

from ledgerlab.error_handling import (
    ContractError,
    ErrorCode,
    ErrorHandlingContract,
    divide,
    transfer,
    transfer_panic,
)
from ledgerlab.host import Env


def _outcome(func, *args):
    try:
        return func(*args)
    except ContractError as exc:
        return exc


@pytest.fixture
def contract():
    env = Env()
    contract_id = env.register(ErrorHandlingContract)
    return env.contract(contract_id)


# Happy paths


def test_transfer_success():
    assert transfer(50, 100) == 50


def test_transfer_full_amount():
    assert transfer(100, 100) == 0


def test_transfer_minimum_valid_amount():
    assert transfer(1, 100) == 99


def test_divide_success():
    assert divide(10, 2) == 5


def test_divide_negative_numbers():
    assert divide(-10, 2) == -5


def test_divide_large_numbers():
    assert divide(1000000, 1000) == 1000


def test_divide_truncates_toward_zero():
    assert divide(-7, 2) == -3
    assert divide(7, -2) == -3


def test_get_verified_state_valid(contract):
    assert contract.get_verified_state(1) == 0


def test_get_verified_state_boundary_value(contract):
    contract.storage.instance[1] = 1000
    assert contract.get_verified_state(1) == 1000


# Error cases


def test_transfer_invalid_amount_zero():
    with pytest.raises(ContractError) as info:
        transfer(0, 100)
    assert info.value.code is ErrorCode.INVALID_AMOUNT


def test_transfer_insufficient_balance():
    with pytest.raises(ContractError) as info:
        transfer(150, 100)
    assert info.value.code is ErrorCode.INSUFFICIENT_BALANCE


def test_transfer_exact_insufficient():
    with pytest.raises(ContractError) as info:
        transfer(101, 100)
    assert info.value.code is ErrorCode.INSUFFICIENT_BALANCE


def test_divide_by_zero():
    with pytest.raises(ContractError) as info:
        divide(10, 0)
    assert info.value.code is ErrorCode.INVALID_AMOUNT


def test_divide_zero_by_zero():
    with pytest.raises(ContractError) as info:
        divide(0, 0)
    assert info.value.code is ErrorCode.INVALID_AMOUNT


# Error type verification


def test_error_type_invalid_amount():
    with pytest.raises(ContractError) as info:
        transfer(0, 100)
    assert info.value.code == 1


def test_error_type_insufficient_balance():
    with pytest.raises(ContractError) as info:
        transfer(150, 100)
    assert info.value.code == 2


def test_error_type_unauthorized():
    error = ContractError(ErrorCode.UNAUTHORIZED)
    assert error.code == 3
    assert error == ContractError(ErrorCode.UNAUTHORIZED)


def test_error_equality():
    assert ContractError(ErrorCode.INVALID_AMOUNT) == ContractError(ErrorCode.INVALID_AMOUNT)
    assert ContractError(ErrorCode.INSUFFICIENT_BALANCE) == ContractError(
        ErrorCode.INSUFFICIENT_BALANCE
    )
    assert ContractError(ErrorCode.INVALID_AMOUNT) != ContractError(
        ErrorCode.INSUFFICIENT_BALANCE
    )
    assert ContractError(ErrorCode.INSUFFICIENT_BALANCE) != ContractError(
        ErrorCode.UNAUTHORIZED
    )
    assert ContractError(ErrorCode.UNAUTHORIZED) != ContractError(ErrorCode.INVALID_AMOUNT)


def test_error_message_names_code():
    assert str(ContractError(ErrorCode.INVALID_AMOUNT)) == "INVALID_AMOUNT"


# Recovery


def test_error_handling_with_match():
    try:
        handled = transfer(0, 100)
    except ContractError as exc:
        handled = {ErrorCode.INVALID_AMOUNT: 100, ErrorCode.INSUFFICIENT_BALANCE: 0}.get(
            exc.code, 50
        )
    assert handled == 100


def test_error_handling_with_unwrap_or():
    try:
        balance = transfer(150, 100)
    except ContractError:
        balance = 0
    assert balance == 0


def test_error_handling_with_unwrap_or_else():
    try:
        balance = transfer(150, 100)
    except ContractError:
        balance = 999
    assert balance == 999


def test_cascading_error_handling():
    try:
        result = divide(transfer(50, 100), 2)
    except ContractError:
        result = 25
    assert result == 25


def test_error_recovery_with_validation():
    assert _outcome(transfer, 50, 100) == 50
    assert _outcome(transfer, 0, 100) == ContractError(ErrorCode.INVALID_AMOUNT)
    assert _outcome(transfer, 150, 100) == ContractError(ErrorCode.INSUFFICIENT_BALANCE)


# Panics


def test_transfer_panic_invalid():
    with pytest.raises(RuntimeError, match="invalid amount"):
        transfer_panic(0, 100)


def test_transfer_panic_insufficient():
    with pytest.raises(RuntimeError, match="insufficient balance"):
        transfer_panic(150, 100)


def test_get_verified_state_corrupted(contract):
    contract.storage.instance[1] = 2000
    with pytest.raises(RuntimeError, match="invariant violated"):
        contract.get_verified_state(1)


# Edge cases


def test_maximum_values():
    max_u64 = 2**64 - 1
    assert transfer(1, max_u64) == max_u64 - 1


def test_minimum_values():
    assert transfer(1, 1) == 0


def test_large_number_division():
    large = (2**127 - 1) // 2
    result = divide(large, 2)
    assert 0 <= large - result * 2 < 2


def test_divide_overflow():
    with pytest.raises(OverflowError):
        divide(-(2**127), -1)


def test_out_of_range_amount_rejected():
    with pytest.raises(ValueError):
        transfer(-1, 100)


def test_error_consistency():
    for _ in range(10):
        first = _outcome(transfer, 0, 100)
        second = _outcome(transfer, 0, 100)
        assert first == second
        assert first == ContractError(ErrorCode.INVALID_AMOUNT)


def test_result_vs_panic_efficiency():
    for _ in range(100):
        assert _outcome(transfer, 0, 100) == ContractError(ErrorCode.INVALID_AMOUNT)
    for amount in range(1, 101):
        assert transfer_panic(amount, 1000) + amount == 1000