"""Parameter, state and authorisation validation for a small token contract.

Each check returns ``None`` when the input passes. It raises
:class:`ValidationError` with a :class:`ValidationErrorCode` when it fails.
Parameter codes lie in 100-199, state codes in 200-299 and
authorisation codes in 300-399.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar

from ledgerlab.host import Address, Contract

TRANSFER_MIN_AMOUNT = 1
TRANSFER_MAX_AMOUNT = 1_000_000
MESSAGE_MAX_LENGTH = 100
TRANSFER_COOLDOWN_SECONDS = 60


class ValidationErrorCode(IntEnum):
    """Codes for failed validations, grouped by range."""

    # Parameter validation (100-199)
    INVALID_AMOUNT = 100
    AMOUNT_TOO_SMALL = 101
    AMOUNT_TOO_LARGE = 102
    INVALID_ADDRESS = 103
    INVALID_STRING = 104
    STRING_TOO_SHORT = 105
    STRING_TOO_LONG = 106
    INVALID_ENUM = 107
    INVALID_ARRAY = 108
    ARRAY_TOO_SMALL = 109
    ARRAY_TOO_LARGE = 110
    INVALID_TIMESTAMP = 111
    TIMESTAMP_IN_PAST = 112
    TIMESTAMP_IN_DISTANT_FUTURE = 113

    # State validation (200-299)
    CONTRACT_NOT_INITIALIZED = 200
    CONTRACT_PAUSED = 201
    CONTRACT_FROZEN = 202
    INSUFFICIENT_BALANCE = 203
    INSUFFICIENT_ALLOWANCE = 204
    RESOURCE_NOT_FOUND = 205
    RESOURCE_ALREADY_EXISTS = 206
    INVALID_STATE_TRANSITION = 207
    INVARIANT_VIOLATION = 208
    RATE_LIMIT_EXCEEDED = 209
    COOLDOWN_ACTIVE = 210

    # Authorisation validation (300-399)
    UNAUTHORIZED = 300
    NOT_ADMIN = 301
    NOT_OWNER = 302
    INSUFFICIENT_ROLE = 303
    SIGNATURE_REQUIRED = 304
    MULTI_SIG_REQUIRED = 305
    INVALID_SIGNATURE = 306
    EXPIRED_SIGNATURE = 307
    WRONG_CONTRACT = 308
    BLACKLISTED = 309


def _camel(name: str) -> str:
    return "".join(part.capitalize() for part in name.lower().split("_"))


class ValidationError(Exception):
    """A failed validation carrying a :class:`ValidationErrorCode`."""

    def __init__(self, code: ValidationErrorCode) -> None:
        self.code = ValidationErrorCode(code)
        super().__init__(_camel(self.code.name))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return self.code == other.code

    def __hash__(self) -> int:
        return hash(self.code)


class UserRole(IntEnum):
    """Roles in increasing order of privilege."""

    NONE = 0
    USER = 1
    MODERATOR = 2
    ADMIN = 3
    OWNER = 4


class ContractState(IntEnum):
    """Lifecycle state of the contract."""

    UNINITIALIZED = 0
    ACTIVE = 1
    PAUSED = 2
    FROZEN = 3


@dataclass(frozen=True)
class DataKey:
    """A storage key: a kind name and the values it is parameterised by."""

    kind: str
    args: tuple = ()

    ADMIN: ClassVar[DataKey]
    OWNER: ClassVar[DataKey]
    STATE: ClassVar[DataKey]
    COUNTER: ClassVar[DataKey]

    @classmethod
    def user_role(cls, address: Address) -> DataKey:
        return cls("UserRole", (address,))

    @classmethod
    def balance(cls, address: Address) -> DataKey:
        return cls("Balance", (address,))

    @classmethod
    def allowance(cls, owner: Address, spender: Address) -> DataKey:
        return cls("Allowance", (owner, spender))

    @classmethod
    def last_action(cls, address: Address) -> DataKey:
        return cls("LastAction", (address,))

    @classmethod
    def cooldown(cls, address: Address) -> DataKey:
        return cls("Cooldown", (address,))

    @classmethod
    def blacklist(cls, address: Address) -> DataKey:
        return cls("Blacklist", (address,))


DataKey.ADMIN = DataKey("Admin")
DataKey.OWNER = DataKey("Owner")
DataKey.STATE = DataKey("State")
DataKey.COUNTER = DataKey("Counter")


def _fail(code: ValidationErrorCode) -> None:
    raise ValidationError(code)


def validate_amount_parameters(amount: int, min_amount: int, max_amount: int) -> None:
    """Require a positive ``amount`` within ``[min_amount, max_amount]``."""
    if amount <= 0:
        _fail(ValidationErrorCode.INVALID_AMOUNT)
    if amount < min_amount:
        _fail(ValidationErrorCode.AMOUNT_TOO_SMALL)
    if amount > max_amount:
        _fail(ValidationErrorCode.AMOUNT_TOO_LARGE)


def validate_string_parameters(text: str, min_length: int, max_length: int) -> None:
    """Require ``text`` to be non-empty and between the given UTF-8 byte lengths."""
    length = len(text.encode("utf-8"))
    if length < min_length:
        _fail(ValidationErrorCode.STRING_TOO_SHORT)
    if length > max_length:
        _fail(ValidationErrorCode.STRING_TOO_LONG)
    if length == 0:
        _fail(ValidationErrorCode.INVALID_STRING)


def validate_address(address: Address) -> None:
    """Require ``address`` to be an :class:`Address`."""
    if not isinstance(address, Address):
        _fail(ValidationErrorCode.INVALID_ADDRESS)


def validate_array_parameters(array: Iterable, min_size: int, max_size: int) -> None:
    """Require the number of elements to lie within ``[min_size, max_size]``."""
    size = len(array) if hasattr(array, "__len__") else sum(1 for _ in array)
    if size < min_size:
        _fail(ValidationErrorCode.ARRAY_TOO_SMALL)
    if size > max_size:
        _fail(ValidationErrorCode.ARRAY_TOO_LARGE)


def _as_role(role) -> UserRole:
    try:
        return UserRole(role)
    except ValueError:
        raise ValidationError(ValidationErrorCode.INVALID_ENUM) from None


class ValidationContract(Contract):
    """A token contract whose every entry point validates before acting."""

    # Initialisation

    def initialize(self, owner: Address) -> None:
        """Make ``owner`` owner and admin and activate the contract."""
        validate_address(owner)
        instance = self.storage.instance
        if DataKey.OWNER in instance:
            _fail(ValidationErrorCode.CONTRACT_NOT_INITIALIZED)
        owner.require_auth()
        instance[DataKey.OWNER] = owner
        instance[DataKey.ADMIN] = owner
        instance[DataKey.STATE] = ContractState.ACTIVE

    # Parameter validation that needs the ledger

    def validate_timestamp_parameters(
        self, timestamp: int, allow_past: bool, max_future_seconds: int
    ) -> None:
        """Reject past timestamps (unless allowed) and ones too far ahead."""
        current_time = self.ledger.timestamp
        if not allow_past and timestamp < current_time:
            _fail(ValidationErrorCode.TIMESTAMP_IN_PAST)
        if timestamp > current_time + max_future_seconds:
            _fail(ValidationErrorCode.TIMESTAMP_IN_DISTANT_FUTURE)

    # State validation

    def validate_contract_state(self, required_state: ContractState) -> None:
        """Require the contract to be active and in ``required_state``."""
        instance = self.storage.instance
        if DataKey.STATE not in instance:
            _fail(ValidationErrorCode.CONTRACT_NOT_INITIALIZED)
        current = ContractState(instance[DataKey.STATE])
        if current is ContractState.UNINITIALIZED:
            _fail(ValidationErrorCode.CONTRACT_NOT_INITIALIZED)
        if current is ContractState.PAUSED:
            _fail(ValidationErrorCode.CONTRACT_PAUSED)
        if current is ContractState.FROZEN:
            _fail(ValidationErrorCode.CONTRACT_FROZEN)
        if current != required_state:
            _fail(ValidationErrorCode.INVALID_STATE_TRANSITION)

    def validate_balance(self, address: Address, required_amount: int) -> None:
        """Require ``address`` to hold at least ``required_amount``."""
        balance = self.storage.persistent.get(DataKey.balance(address), 0)
        if balance < required_amount:
            _fail(ValidationErrorCode.INSUFFICIENT_BALANCE)

    def validate_allowance(
        self, owner: Address, spender: Address, required_amount: int
    ) -> None:
        """Require ``spender`` to be allowed at least ``required_amount`` of ``owner``'s funds."""
        allowance = self.storage.persistent.get(DataKey.allowance(owner, spender), 0)
        if allowance < required_amount:
            _fail(ValidationErrorCode.INSUFFICIENT_ALLOWANCE)

    def validate_cooldown(self, address: Address, cooldown_seconds: int) -> None:
        """Require ``cooldown_seconds`` to have passed since ``address``'s last action."""
        last_action = self.storage.persistent.get(DataKey.last_action(address))
        if last_action is not None and self.ledger.timestamp < last_action + cooldown_seconds:
            _fail(ValidationErrorCode.COOLDOWN_ACTIVE)

    # Authorisation validation

    def validate_role(self, address: Address, required_role: UserRole) -> None:
        """Require ``address`` to be unlisted and to hold at least ``required_role``."""
        instance = self.storage.instance
        if DataKey.blacklist(address) in instance:
            _fail(ValidationErrorCode.BLACKLISTED)
        required_role = _as_role(required_role)
        user_role = UserRole(instance.get(DataKey.user_role(address), UserRole.NONE))
        if user_role < required_role:
            _fail(ValidationErrorCode.INSUFFICIENT_ROLE)
        if required_role is UserRole.OWNER and user_role is not UserRole.OWNER:
            _fail(ValidationErrorCode.NOT_OWNER)
        if required_role is UserRole.ADMIN and user_role not in (UserRole.ADMIN, UserRole.OWNER):
            _fail(ValidationErrorCode.NOT_ADMIN)

    def validate_ownership(self, address: Address) -> None:
        """Require ``address`` to be the recorded owner."""
        owner = self.storage.instance.get(DataKey.OWNER)
        if owner is None:
            _fail(ValidationErrorCode.CONTRACT_NOT_INITIALIZED)
        if address != owner:
            _fail(ValidationErrorCode.NOT_OWNER)

    def validate_admin(self, address: Address) -> None:
        """Require ``address`` to be the recorded admin."""
        admin = self.storage.instance.get(DataKey.ADMIN)
        if admin is None:
            _fail(ValidationErrorCode.CONTRACT_NOT_INITIALIZED)
        if address != admin:
            _fail(ValidationErrorCode.NOT_ADMIN)

    # Combined validation

    def validated_transfer(
        self,
        sender: Address,
        recipient: Address,
        amount: int,
        message: str | None = None,
    ) -> None:
        """Move ``amount`` from ``sender`` to ``recipient`` after every check passes."""
        validate_address(sender)
        validate_address(recipient)
        validate_amount_parameters(amount, TRANSFER_MIN_AMOUNT, TRANSFER_MAX_AMOUNT)
        if message is not None:
            validate_string_parameters(message, 0, MESSAGE_MAX_LENGTH)

        self.validate_contract_state(ContractState.ACTIVE)
        self.validate_balance(sender, amount)

        self.validate_role(sender, UserRole.USER)
        sender.require_auth()

        self.validate_cooldown(sender, TRANSFER_COOLDOWN_SECONDS)

        persistent = self.storage.persistent
        sender_balance = persistent.get(DataKey.balance(sender), 0)
        recipient_balance = persistent.get(DataKey.balance(recipient), 0)
        persistent[DataKey.balance(sender)] = sender_balance - amount
        persistent[DataKey.balance(recipient)] = recipient_balance + amount
        persistent[DataKey.last_action(sender)] = self.ledger.timestamp

    # Administration

    def set_user_role(self, admin: Address, user: Address, role: UserRole) -> None:
        """Assign ``role`` to ``user``; only the admin may do this."""
        self.validate_admin(admin)
        admin.require_auth()
        validate_address(user)
        self.storage.instance[DataKey.user_role(user)] = _as_role(role)

    def pause_contract(self, admin: Address) -> None:
        """Pause the contract; only the admin may do this."""
        self.validate_admin(admin)
        admin.require_auth()
        self.storage.instance[DataKey.STATE] = ContractState.PAUSED

    def resume_contract(self, admin: Address) -> None:
        """Reactivate the contract; only the admin may do this."""
        self.validate_admin(admin)
        admin.require_auth()
        self.storage.instance[DataKey.STATE] = ContractState.ACTIVE

    # Queries

    def get_contract_state(self) -> ContractState:
        """Return the contract state, ``UNINITIALIZED`` if never set."""
        return ContractState(
            self.storage.instance.get(DataKey.STATE, ContractState.UNINITIALIZED)
        )

    def get_user_role(self, user: Address) -> UserRole:
        """Return ``user``'s role, ``NONE`` if never assigned."""
        return UserRole(self.storage.instance.get(DataKey.user_role(user), UserRole.NONE))

    def get_balance(self, address: Address) -> int:
        """Return ``address``'s balance, 0 if none is recorded."""
        return self.storage.persistent.get(DataKey.balance(address), 0)