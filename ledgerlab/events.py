"""Structured, query-friendly event emission.

Every structured event uses the topic layout ``(namespace, action, [key...])``.
Indexed fields go in the topics and the rest of the payload goes in the data slot.
"""

from __future__ import annotations

from dataclasses import dataclass

from ledgerlab.host import Address, Contract, symbol, symbol_short

CONTRACT_NS = symbol_short("events")
ACTION_TRANSFER = symbol_short("transfer")
ACTION_CONFIG_UPDATE = symbol_short("cfg_upd")
ACTION_ADMIN = symbol_short("admin")
ACTION_AUDIT = symbol_short("audit")

_SIMPLE = symbol_short("simple")
_TAGGED = symbol_short("tagged")
_MULTI = symbol_short("multi")
_STATUS = symbol_short("status")

_U32_MAX = 2**32 - 1
_U64_MAX = 2**64 - 1
_I128_MIN = -(2**127)
_I128_MAX = 2**127 - 1


def _unsigned(name: str, value: int, maximum: int) -> int:
    if not 0 <= value <= maximum:
        raise ValueError(f"{name} must lie between 0 and {maximum}")
    return value


def _i128(name: str, value: int) -> int:
    if not _I128_MIN <= value <= _I128_MAX:
        raise ValueError(f"{name} must fit in a signed 128-bit integer")
    return value


@dataclass(frozen=True)
class TransferEventData:
    """Payload of a token-transfer event."""

    amount: int
    memo: int


@dataclass(frozen=True)
class ConfigUpdateEventData:
    """Payload of a configuration change, old and new value."""

    old_value: int
    new_value: int


@dataclass(frozen=True)
class AdminActionEventData:
    """Payload of a privileged-operation event."""

    action: str
    timestamp: int


@dataclass(frozen=True)
class AuditTrailEventData:
    """Payload of an audit-trail event."""

    details: str
    timestamp: int
    sequence: int


class EventsContract(Contract):
    """Emits events with a consistent, filterable topic layout."""

    def _publish(self, topics: tuple, data) -> None:
        self.env.publish(self.address, topics, data)

    def transfer(self, sender: Address, recipient: Address, amount: int, memo: int) -> None:
        """Topics ``(events, transfer, sender, recipient)``; data amount and memo."""
        data = TransferEventData(_i128("amount", amount), _unsigned("memo", memo, _U64_MAX))
        self._publish((CONTRACT_NS, ACTION_TRANSFER, sender, recipient), data)

    def update_config(self, key: str, old_value: int, new_value: int) -> None:
        """Topics ``(events, cfg_upd, key)``; data old and new value."""
        data = ConfigUpdateEventData(
            _unsigned("old_value", old_value, _U64_MAX),
            _unsigned("new_value", new_value, _U64_MAX),
        )
        self._publish((CONTRACT_NS, ACTION_CONFIG_UPDATE, symbol(key)), data)

    def admin_action(self, admin: Address, action: str) -> None:
        """Topics ``(events, admin, admin)``; data action and ledger timestamp."""
        data = AdminActionEventData(symbol(action), self.ledger.timestamp)
        self._publish((CONTRACT_NS, ACTION_ADMIN, admin), data)

    def audit_trail(self, actor: Address, action: str, details: str) -> None:
        """Topics ``(events, audit, actor, action)``; data details, timestamp, sequence."""
        data = AuditTrailEventData(symbol(details), self.ledger.timestamp, self.ledger.sequence)
        self._publish((CONTRACT_NS, ACTION_AUDIT, actor, symbol(action)), data)

    def emit_simple(self, value: int) -> None:
        """One topic, ``simple``; data the value."""
        self._publish((_SIMPLE,), _unsigned("value", value, _U64_MAX))

    def emit_tagged(self, tag: str, value: int) -> None:
        """Topics ``(tagged, tag)``; data the value."""
        self._publish((_TAGGED, symbol(tag)), _unsigned("value", value, _U64_MAX))

    def emit_multiple(self, count: int) -> None:
        """Emit ``count`` events ``(multi, i)`` carrying ``i``."""
        for index in range(_unsigned("count", count, _U32_MAX)):
            self._publish((_MULTI, index), index)

    def emit_transfer(self, sender: Address, recipient: Address, amount: int) -> None:
        """Topics ``(transfer, from, to)``; data the amount."""
        self._publish(
            (ACTION_TRANSFER, sender, recipient), _unsigned("amount", amount, _U64_MAX)
        )

    def emit_namespaced(self, category: str, action: str, pool_id: str, amount: int) -> None:
        """Topics ``(category, action, pool_id)``; data the amount."""
        self._publish(
            (symbol(category), symbol(action), symbol(pool_id)),
            _unsigned("amount", amount, _U64_MAX),
        )

    def emit_status_change(self, entity_id: str, old_status: str, new_status: str) -> None:
        """Topics ``(status, entity, old, new)``; data the ledger sequence."""
        self._publish(
            (_STATUS, symbol(entity_id), symbol(old_status), symbol(new_status)),
            self.ledger.sequence,
        )