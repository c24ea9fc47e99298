"""An in-memory ledger host with example contracts for events, authorization, errors, value types, conversions and validation."""

__version__ = "0.1.0"
__all__ = [
    "host",
    "auth_context",
    "error_handling",
    "events",
    "soroban_types",
    "type_conversions",
    "validation",
]