# ledgerlab

A small in-memory ledger host and a set of example contracts. It is meant for
learning the common patterns of contract code. It covers emitting structured
events, requiring authorization, reporting errors, handling the ledger's value
types, converting values with range checks, and validating input and state.

Everything runs in-process and uses only the standard library.

## Installing

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## The host: `ledgerlab.host`

- `Env` holds the contracts, their storage, the published events and the ledger.
  - `register(contract_cls)` creates a contract at a new address and returns
    that address.
  - `contract(address)` returns the contract instance at an address. An unknown
    address raises `HostError`.
  - `generate_address()` makes a fresh account address.
  - `storage(address)` returns that contract's `ContractStorage`.
  - `publish(contract, topics, data)` records an `Event`. More than four topics
    raises `HostError`.
  - `mock_all_auths()` grants every later authorization request.
  - `env.events` is the list of published events in order.
  - `env.authorized` lists the addresses whose authorization was granted.
  - `env.ledger` is a `Ledger` with a `timestamp` and a `sequence`, which you
    may set.
- `Address` is an account or contract identifier. `require_auth()` raises
  `AuthError`, a subclass of `HostError`, unless `mock_all_auths()` has been
  called on its `Env`.
- `ContractStorage` has three dicts: `instance`, `persistent` and `temporary`.
- `Event` is a frozen record of `contract`, `topics` (a tuple) and `data`.
- `Contract` is the base class for contracts. It gives access to `env`,
  `address`, `storage` and `ledger`.
- `symbol_short(text)` and `symbol(text)` check a symbol and return it. A
  symbol may use only `A-Z a-z 0-9 _`, up to 9 characters for `symbol_short`
  and up to 32 for `symbol`. Anything else raises `ValueError`.

```python
from ledgerlab.host import Env
from ledgerlab.auth_context import AuthContextContract

env = Env()
contract_id = env.register(AuthContextContract)
client = env.contract(contract_id)
user = env.generate_address()

env.mock_all_auths()
assert client.get_invoker(user) == user
```

## The example contracts

### `ledgerlab.events`

`EventsContract` publishes events with a fixed topic layout.

- The structured events use `(namespace, action, [keys...])` topics, with the
  namespace `"events"`:
  - `transfer` carries a `TransferEventData`.
  - `update_config` carries a `ConfigUpdateEventData`.
  - `admin_action` carries an `AdminActionEventData`.
  - `audit_trail` carries an `AuditTrailEventData`.
- The simpler forms are `emit_simple`, `emit_tagged`, `emit_multiple`,
  `emit_transfer`, `emit_namespaced` and `emit_status_change`.

```python
from ledgerlab.host import Env
from ledgerlab.events import EventsContract

env = Env()
events = env.contract(env.register(EventsContract))
events.update_config("fee", 5, 10)
assert env.events[0].topics == ("events", "cfg_upd", "fee")
assert env.events[0].data.new_value == 10
```

### `ledgerlab.auth_context`

- `AuthContextContract` provides `get_invoker`, `get_current_address`,
  `get_auth_context`, `admin_only_op` and `check_nested_auth`.
- `ProxyContract.proxy_call(target_contract, user)` requires the user's
  authorization. It then calls the target contract, which requires it again.

### `ledgerlab.error_handling`

- `transfer(amount, balance)` and `divide(a, b)` raise `ContractError` for
  expected failures. The error's `code` is an `ErrorCode`:
  `INVALID_AMOUNT`, `INSUFFICIENT_BALANCE` or `UNAUTHORIZED`.
- `transfer_panic` raises a plain `RuntimeError` instead.
- `ErrorHandlingContract.get_verified_state(key)` returns a stored value, or 0
  if none is stored. It raises `RuntimeError` if the value exceeds 1000.

```python
from ledgerlab.error_handling import transfer, ContractError, ErrorCode

assert transfer(50, 100) == 50
try:
    transfer(0, 100)
except ContractError as err:
    assert err.code is ErrorCode.INVALID_AMOUNT
```

### `ledgerlab.soroban_types`

`SorobanTypesContract` stores, returns and compares the ledger's value types:

- addresses;
- `bytes`;
- 32-byte fixed values;
- symbols;
- strings, whose length is counted in UTF-8 bytes.

Strings are joined with `concatenate_strings`. The result may be at most 512
bytes.

### `ledgerlab.type_conversions`

These functions convert values with range checks:

- `convert_numbers`
- `convert_collections`
- `safe_conversions`
- `create_user_data`
- `convert_val_to_config`
- `validate_and_convert`
- `sum_different_types`
- `val_roundtrip`
- `convert_strings`
- `convert_bytes_to_types`
- `batch_convert_numbers`

Loosely typed values are `Val(kind, value)`, with `kind` a `ValKind`. A failed
conversion raises `ConversionError`, whose `code` is a `ConversionErrorCode`.
The results are plain values or the `UserData` and `Config` records.

Some of these functions return fixed sample values rather than parsing their
input:

- `convert_strings` always produces the symbol `hello`.
- `convert_bytes_to_types` always returns `hello_world` as text and symbol,
  alongside the input bytes.
- `batch_convert_numbers` maps three-byte strings to 123 and four-byte strings
  to -456, and drops every other string.

### `ledgerlab.validation`

- Module functions check parameters:
  - `validate_amount_parameters`
  - `validate_string_parameters`
  - `validate_address`
  - `validate_array_parameters`
- `ValidationContract` checks:
  - timestamps;
  - contract state (`ContractState`);
  - balances, allowances and cooldowns;
  - roles (`UserRole`), ownership and admin rights.
- `ValidationContract.validated_transfer` runs all of these checks before it
  moves funds.
- Storage keys are `DataKey` values.
- A failure raises `ValidationError`. Its `ValidationErrorCode` lies in:
  - 100–199 for parameters;
  - 200–299 for state;
  - 300–399 for authorization.

## What it does not do

- There is no command-line tool. The package is a library.
- Nothing is saved. Storage and events live only as long as the `Env` does.
- Authorization is not verified against real keys or signatures. Either every
  request is granted after `mock_all_auths()`, or every request fails.
- Events are not indexed or queried. `env.events` is a plain list that you
  filter yourself.