"""
Signer backed by a locally held private key.
"""
from typing import Any, Dict

from eth_account import Account
from eth_account.signers.local import LocalAccount


class LocalSigner:
    """Signs transactions with an eth-account key."""

    node_managed = False

    def __init__(self, private_key: str):
        if not private_key:
            raise ValueError("private_key must not be empty")
        self._account: LocalAccount = Account.from_key(private_key.strip())
        self.address = self._account.address

    def sign_transaction(self, transaction_dict: Dict[str, Any]) -> Any:
        return self._account.sign_transaction(transaction_dict)

    def __repr__(self) -> str:
        return f"LocalSigner({self.address})"
