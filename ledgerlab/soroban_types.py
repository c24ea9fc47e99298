"""A contract exercising the ledger's value types.

The types map onto Python as follows:

* addresses are :class:`~ledgerlab.host.Address` values;
* variable-length byte arrays are ``bytes``;
* fixed-length byte arrays are ``bytes`` of exactly 32 bytes;
* symbols are short ``str`` identifiers checked by :func:`~ledgerlab.host.symbol`;
* strings are ``str``; their length is measured in UTF-8 bytes.
"""

from __future__ import annotations

from ledgerlab.host import Address, Contract, symbol, symbol_short

FIXED_BYTES_LEN = 32
CONCAT_BUFFER_LEN = 512
MAX_TEXT_LEN = 1000

_U32_MAX = 2**32 - 1

_KEY_OWNER = symbol_short("owner")
_KEY_BYTES = symbol_short("bdata")
_KEY_FIXED = symbol_short("fbytes")
_KEY_SYMBOL = symbol_short("symbol")
_KEY_STRING = symbol_short("string")
_KEY_SYM_STR = symbol_short("sym_str")
_KEY_ORIG_STR = symbol_short("orig_str")
_KEY_HASH_BYTES = symbol_short("hbytes")
_KEY_VAR_BYTES = symbol_short("varbytes")
_KEY_USER_ADDR = symbol_short("user_addr")
_KEY_USERNAME = symbol_short("username")
_KEY_BIO = symbol_short("bio")
_KEY_AVATAR = symbol_short("avatar")
_KEY_STATUS = symbol_short("ustatus")

_DEFAULT_BYTES = b"default"
_DEFAULT_SYMBOL = symbol_short("default")
_DEFAULT_STRING = "default"


def _as_bytes(name: str, data) -> bytes:
    if isinstance(data, str) or not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"{name} must be a bytes-like value")
    return bytes(data)


def _as_fixed(name: str, data) -> bytes:
    value = _as_bytes(name, data)
    if len(value) != FIXED_BYTES_LEN:
        raise ValueError(f"{name} must be exactly {FIXED_BYTES_LEN} bytes, got {len(value)}")
    return value


def _as_text(name: str, text) -> str:
    if not isinstance(text, str):
        raise TypeError(f"{name} must be a string")
    return text


def _text_len(text: str) -> int:
    return len(text.encode("utf-8"))


class SorobanTypesContract(Contract):
    """Stores, returns and converts addresses, bytes, symbols and strings."""

    # Addresses

    def store_address(self, owner: Address) -> None:
        """Store ``owner`` in instance storage."""
        self.storage.instance[_KEY_OWNER] = owner

    def get_address(self) -> Address:
        """Return the stored owner, or this contract's own address if none is stored."""
        return self.storage.instance.get(_KEY_OWNER, self.address)

    def verify_address(self, addr1: Address, addr2: Address) -> bool:
        """Report whether two addresses are equal."""
        return addr1 == addr2

    def get_contract_address(self) -> Address:
        """Return this contract's own address."""
        return self.address

    # Variable-length bytes

    def store_bytes(self, data) -> None:
        """Store a byte string."""
        self.storage.instance[_KEY_BYTES] = _as_bytes("data", data)

    def get_bytes(self) -> bytes:
        """Return the stored byte string, or ``b"default"``."""
        return self.storage.instance.get(_KEY_BYTES, _DEFAULT_BYTES)

    def echo_bytes(self, data) -> bytes:
        """Return ``data`` unchanged."""
        return _as_bytes("data", data)

    def get_bytes_length(self, data) -> int:
        """Return the number of bytes in ``data``."""
        return len(_as_bytes("data", data))

    # Fixed-length bytes

    def store_fixed_bytes(self, data) -> None:
        """Store a 32-byte value."""
        self.storage.instance[_KEY_FIXED] = _as_fixed("data", data)

    def get_fixed_bytes(self) -> bytes:
        """Return the stored 32-byte value, or 32 zero bytes."""
        return self.storage.instance.get(_KEY_FIXED, bytes(FIXED_BYTES_LEN))

    def create_hash_bytes(self, seed: int) -> bytes:
        """Derive a deterministic 32-byte value from the low byte of ``seed``."""
        if not 0 <= seed <= _U32_MAX:
            raise ValueError("seed must fit in an unsigned 32-bit integer")
        seed_byte = seed & 0xFF
        return bytes((seed_byte * position) & 0xFF for position in range(1, FIXED_BYTES_LEN + 1))

    def fixed_to_variable_bytes(self, fixed) -> bytes:
        """Turn a 32-byte value into a plain byte string."""
        return _as_fixed("fixed", fixed)

    # Symbols

    def store_symbol(self, sym: str) -> None:
        """Store a symbol."""
        self.storage.instance[_KEY_SYMBOL] = symbol(sym)

    def get_symbol(self) -> str:
        """Return the stored symbol, or ``default``."""
        return self.storage.instance.get(_KEY_SYMBOL, _DEFAULT_SYMBOL)

    def create_symbol(self, sym: str) -> str:
        """Return the given symbol after checking it."""
        return symbol(sym)

    def compare_symbols(self, sym1: str, sym2: str) -> bool:
        """Report whether two symbols are equal."""
        return symbol(sym1) == symbol(sym2)

    # Strings

    def store_string(self, text: str) -> None:
        """Store a string."""
        self.storage.instance[_KEY_STRING] = _as_text("text", text)

    def get_string(self) -> str:
        """Return the stored string, or ``"default"``."""
        return self.storage.instance.get(_KEY_STRING, _DEFAULT_STRING)

    def create_string(self, text: str) -> str:
        """Return ``text`` unchanged."""
        return _as_text("text", text)

    def get_string_length(self, text: str) -> int:
        """Return the length of ``text`` in UTF-8 bytes."""
        return _text_len(_as_text("text", text))

    def concatenate_strings(self, str1: str, str2: str) -> str:
        """Join two strings; the result may be at most 512 UTF-8 bytes."""
        combined = _as_text("str1", str1).encode("utf-8") + _as_text("str2", str2).encode("utf-8")
        if len(combined) > CONCAT_BUFFER_LEN:
            raise RuntimeError("combined string too long")
        return combined.decode("utf-8")

    # Several types together

    def type_conversion_demo(self) -> None:
        """Store a symbol, the same text as a string, and a hash in both byte forms."""
        instance = self.storage.instance
        instance[_KEY_SYM_STR] = symbol_short("token")
        instance[_KEY_ORIG_STR] = "token"
        digest = bytes(range(1, FIXED_BYTES_LEN + 1))
        instance[_KEY_HASH_BYTES] = digest
        instance[_KEY_VAR_BYTES] = bytes(digest)

    def create_user_profile(
        self, user: Address, username: str, bio: str, avatar_hash
    ) -> int:
        """Store a profile and return the combined byte length of name and bio."""
        username = _as_text("username", username)
        bio = _as_text("bio", bio)
        avatar = _as_fixed("avatar_hash", avatar_hash)
        instance = self.storage.instance
        instance[_KEY_USER_ADDR] = user
        instance[_KEY_USERNAME] = username
        instance[_KEY_BIO] = bio
        instance[_KEY_AVATAR] = avatar
        instance[_KEY_STATUS] = symbol("active")
        return _text_len(username) + _text_len(bio)

    def validate_types(self, addr: Address, sym: str, text: str) -> bool:
        """Report whether ``text`` is at most 1000 UTF-8 bytes long."""
        symbol(sym)
        return _text_len(_as_text("text", text)) <= MAX_TEXT_LEN