"""Contracts showing how callers authorise invocations, including through a proxy."""

from __future__ import annotations

from ledgerlab.host import Address, Contract


class AuthContextContract(Contract):
    """Reports and checks the authorising caller."""

    def get_invoker(self, invoker: Address) -> Address:
        """Require ``invoker``'s authorisation and return it."""
        invoker.require_auth()
        return invoker

    def get_current_address(self) -> Address:
        """Return this contract's own address."""
        return self.address

    def get_auth_context(self, invoker: Address) -> Address:
        """Require ``invoker``'s authorisation and return the authenticated address."""
        invoker.require_auth()
        return invoker

    def admin_only_op(self, invoker: Address, expected_admin: Address) -> bool:
        """Authorise ``invoker`` and report whether it is the expected admin."""
        invoker.require_auth()
        return invoker == expected_admin

    def check_nested_auth(self, user: Address) -> bool:
        """Require ``user``'s authorisation, however deep in the call chain."""
        user.require_auth()
        return True


class ProxyContract(Contract):
    """Forwards a user's call to an :class:`AuthContextContract`."""

    def proxy_call(self, target_contract: Address, user: Address) -> Address:
        """Authorise ``user`` here, then again in the target contract."""
        user.require_auth()
        target = self.env.contract(target_contract)
        target.check_nested_auth(user)
        return user