"""
Signer for accounts unlocked on the connected node.

Development nodes (Hardhat, Anvil) expose funded accounts through
``eth_accounts`` and sign on ``eth_sendTransaction``; nothing is signed locally.
"""
from typing import Any, Dict

from web3 import Web3

from ..exceptions import TransactionError


class NodeSigner:
    """Account whose key lives on the node."""

    node_managed = True

    def __init__(self, address: str):
        self.address = Web3.to_checksum_address(address)

    def sign_transaction(self, transaction_dict: Dict[str, Any]) -> Any:
        raise TransactionError(
            f"Account {self.address} is managed by the node; submit with eth_sendTransaction"
        )

    def __repr__(self) -> str:
        return f"NodeSigner({self.address})"
