"""
DataContract SDK - Python client for sending data records to a deployed DataContract.
"""
from .version import __version__
from .client import DataContractClient
from .batch import send_batch
from .config import NetworkConfig, RunConfig, load_run_config, read_contract_address, resolve_signers
from .events import decode_data_sent_log, decode_receipt
from .models import DataEntry, TxReceipt, DataSentEvent, LogDecodeResult, BatchOutcome
from .signer import Signer, LocalSigner, NodeSigner
from .utils import encode_bytes32_string, decode_bytes32_string
from .exceptions import (
    DataContractError,
    ConfigurationError,
    NetworkError,
    TransactionError,
    TransactionRevertedError,
)

__all__ = [
    "DataContractClient",
    "send_batch",
    "NetworkConfig",
    "RunConfig",
    "load_run_config",
    "read_contract_address",
    "resolve_signers",
    "decode_data_sent_log",
    "decode_receipt",
    "DataEntry",
    "TxReceipt",
    "DataSentEvent",
    "LogDecodeResult",
    "BatchOutcome",
    "Signer",
    "LocalSigner",
    "NodeSigner",
    "encode_bytes32_string",
    "decode_bytes32_string",
    "DataContractError",
    "ConfigurationError",
    "NetworkError",
    "TransactionError",
    "TransactionRevertedError",
    "__version__",
]
