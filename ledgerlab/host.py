"""A small in-memory ledger host: addresses, contracts, storage and events."""

from __future__ import annotations

import itertools
import re
from dataclasses import dataclass, field
from typing import Any

MAX_TOPICS = 4
SHORT_SYMBOL_MAX = 9
SYMBOL_MAX = 32
_SYMBOL_CHARS = re.compile(r"[A-Za-z0-9_]*")


class HostError(Exception):
    """Raised when the host rejects an operation."""


class AuthError(HostError):
    """Raised when an address has not authorised the current invocation."""

    def __init__(self, message: str = "HostError: Error(Auth, InvalidAction)") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class Address:
    """An account or contract identifier bound to the environment that issued it."""

    key: str
    env: Env | None = field(default=None, compare=False, repr=False)

    def require_auth(self) -> None:
        """Fail unless this address has authorised the current call."""
        if self.env is None:
            raise AuthError()
        self.env._require_auth(self)

    def __str__(self) -> str:
        return self.key


@dataclass
class Ledger:
    """The ledger view contracts see: close time and sequence number."""

    timestamp: int = 0
    sequence: int = 0


@dataclass(frozen=True)
class Event:
    """A published event: emitting contract, indexed topics and a data payload."""

    contract: Address
    topics: tuple
    data: Any


@dataclass
class ContractStorage:
    """The storage areas owned by one contract."""

    instance: dict = field(default_factory=dict)
    persistent: dict = field(default_factory=dict)
    temporary: dict = field(default_factory=dict)


class Contract:
    """Base class for contracts hosted by an :class:`Env`."""

    def __init__(self, env: Env, address: Address) -> None:
        self.env = env
        self.address = address

    @property
    def storage(self) -> ContractStorage:
        return self.env.storage(self.address)

    @property
    def ledger(self) -> Ledger:
        return self.env.ledger


class Env:
    """Hosts contracts, their storage, published events and authorisation."""

    def __init__(self, ledger: Ledger | None = None) -> None:
        self.ledger = ledger if ledger is not None else Ledger()
        self.events: list[Event] = []
        self.authorized: list[Address] = []
        self._auths_mocked = False
        self._contracts: dict[Address, Contract] = {}
        self._storage: dict[Address, ContractStorage] = {}
        self._counter = itertools.count(1)

    def _new_address(self, prefix: str) -> Address:
        return Address(f"{prefix}{next(self._counter):055d}", self)

    def generate_address(self) -> Address:
        """Create a fresh account address."""
        return self._new_address("G")

    def register(self, contract_cls: type[Contract]) -> Address:
        """Instantiate a contract class at a new contract address."""
        address = self._new_address("C")
        self._contracts[address] = contract_cls(self, address)
        self._storage[address] = ContractStorage()
        return address

    def contract(self, address: Address) -> Contract:
        """Return the contract registered at ``address``."""
        try:
            return self._contracts[address]
        except KeyError:
            raise HostError(f"no contract registered at {address}") from None

    def mock_all_auths(self) -> None:
        """Treat every authorisation request as granted."""
        self._auths_mocked = True

    def storage(self, address: Address) -> ContractStorage:
        """Return the storage of the contract at ``address``."""
        self.contract(address)
        return self._storage[address]

    def publish(self, contract: Address, topics, data: Any) -> Event:
        """Record an event emitted by ``contract``."""
        self.contract(contract)
        topics = tuple(topics)
        if len(topics) > MAX_TOPICS:
            raise HostError(f"events carry at most {MAX_TOPICS} topics, got {len(topics)}")
        event = Event(contract, topics, data)
        self.events.append(event)
        return event

    def _require_auth(self, address: Address) -> None:
        if not self._auths_mocked:
            raise AuthError()
        self.authorized.append(address)


def _check_symbol(text: str, limit: int) -> str:
    if len(text) > limit:
        raise ValueError(f"symbol {text!r} is longer than {limit} characters")
    if not _SYMBOL_CHARS.fullmatch(text):
        raise ValueError(f"symbol {text!r} may hold only a-z, A-Z, 0-9 and _")
    return text


def symbol_short(text: str) -> str:
    """Validate a short symbol of at most nine characters."""
    return _check_symbol(text, SHORT_SYMBOL_MAX)


def symbol(text: str) -> str:
    """Validate a symbol of at most 32 characters."""
    return _check_symbol(text, SYMBOL_MAX)