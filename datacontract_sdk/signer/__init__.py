"""
Transaction signers for the DataContract SDK.
"""
from typing import Any, Dict, Protocol


class Signer(Protocol):
    """Protocol for transaction signers"""
    address: str

    def sign_transaction(self, transaction_dict: Dict[str, Any]) -> Any:
        """Sign transaction and return signed tx object"""
        ...


from .local import LocalSigner  # noqa: E402
from .node import NodeSigner  # noqa: E402

__all__ = ["Signer", "LocalSigner", "NodeSigner"]
