"""
Exceptions for the DataContract SDK.
"""
from typing import Optional


class DataContractError(Exception):
    """Base exception for DataContract SDK errors."""
    pass


class ConfigurationError(DataContractError):
    """Raised when required configuration is missing or invalid."""
    pass


class NetworkError(DataContractError):
    """Raised when the connected network does not match the expected one."""
    pass


class TransactionError(DataContractError):
    """
    Raised when a transaction cannot be built, signed, sent or confirmed.

    Attributes:
        reason: Revert reason reported by the node, if any
        tx_hash: Hash of the transaction when it was already broadcast
    """

    def __init__(self, message: str, reason: Optional[str] = None, tx_hash: Optional[str] = None):
        self.reason = reason
        self.tx_hash = tx_hash
        super().__init__(message)


class TransactionRevertedError(TransactionError):
    """Raised when a mined transaction has a failed (0) status."""
    pass
