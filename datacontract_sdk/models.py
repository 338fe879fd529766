"""
Data models for the DataContract SDK.
"""
from typing import Dict, Any, Optional, List
from pydantic import BaseModel, ConfigDict, Field, field_validator
from web3 import Web3

from .utils import encode_bytes32_string, decode_bytes32_string, BYTES32_LENGTH


class DataEntry(BaseModel):
    """A record sent to the contract through sendDataToTarget"""
    target: str
    owner: bytes
    actref: bytes
    topic: str

    @field_validator("target")
    @classmethod
    def _checksum_target(cls, value: str) -> str:
        if not Web3.is_address(value):
            raise ValueError(f"Invalid target address: {value}")
        return Web3.to_checksum_address(value)

    @field_validator("owner", "actref")
    @classmethod
    def _check_bytes32(cls, value: bytes) -> bytes:
        if len(value) != BYTES32_LENGTH:
            raise ValueError(f"Expected {BYTES32_LENGTH} bytes, got {len(value)}")
        return bytes(value)

    @classmethod
    def from_labels(cls, target: str, owner: str, actref: str, topic: str) -> "DataEntry":
        """Build an entry from short text labels encoded as bytes32 strings."""
        return cls(
            target=target,
            owner=encode_bytes32_string(owner),
            actref=encode_bytes32_string(actref),
            topic=topic,
        )


class TxReceipt(BaseModel):
    """Transaction receipt from the blockchain"""
    model_config = ConfigDict(populate_by_name=True)

    tx_hash: str = Field(..., alias="transactionHash")
    block_number: int = Field(..., alias="blockNumber")
    block_hash: str = Field(..., alias="blockHash")
    status: int
    gas_used: int = Field(..., alias="gasUsed")
    from_address: str = Field(..., alias="from")
    to_address: Optional[str] = Field(None, alias="to")
    logs: List[Dict[str, Any]]


class DataSentEvent(BaseModel):
    """Decoded DataSentToTarget event"""
    model_config = ConfigDict(populate_by_name=True)

    from_address: str = Field(..., alias="from")
    to_address: str = Field(..., alias="to")
    owner: str
    actref: str
    topic: str
    block_number: Optional[int] = Field(None, alias="blockNumber")
    tx_hash: Optional[str] = Field(None, alias="transactionHash")
    log_index: Optional[int] = Field(None, alias="logIndex")

    @property
    def owner_label(self) -> Optional[str]:
        try:
            return decode_bytes32_string(self.owner)
        except ValueError:
            return None

    @property
    def actref_label(self) -> Optional[str]:
        try:
            return decode_bytes32_string(self.actref)
        except ValueError:
            return None


class LogDecodeResult(BaseModel):
    """
    Outcome of decoding one receipt log.

    A log either matches the DataSentToTarget event (``event`` is set) or is
    foreign to it (``reason`` says why it was not recognised).
    """
    log_index: Optional[int] = None
    address: Optional[str] = None
    event: Optional[DataSentEvent] = None
    reason: Optional[str] = None

    @property
    def matched(self) -> bool:
        return self.event is not None


class BatchOutcome(BaseModel):
    """Result of sending one entry of a batch"""
    index: int
    entry: DataEntry
    success: bool
    tx_hash: Optional[str] = None
    block_number: Optional[int] = None
    error: Optional[str] = None
    reason: Optional[str] = None
