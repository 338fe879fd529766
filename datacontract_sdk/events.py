"""
Decoding of DataSentToTarget events from transaction logs.
"""
import logging
from typing import Any, List, Mapping, Tuple

from eth_abi.exceptions import DecodingError
from web3.contract import Contract
from web3.exceptions import Web3Exception

from .models import DataSentEvent, LogDecodeResult, TxReceipt
from .utils import to_hex

logger = logging.getLogger(__name__)

DATA_SENT_EVENT = "DataSentToTarget"


def event_from_data(event_data: Mapping[str, Any]) -> DataSentEvent:
    """Convert web3 EventData for DataSentToTarget into a DataSentEvent."""
    args = event_data["args"]
    tx_hash = event_data.get("transactionHash")
    return DataSentEvent(
        from_address=args["from"],
        to_address=args["to"],
        owner=to_hex(args["owner"]),
        actref=to_hex(args["actref"]),
        topic=args["topic"],
        block_number=event_data.get("blockNumber"),
        tx_hash=to_hex(tx_hash) if tx_hash is not None else None,
        log_index=event_data.get("logIndex"),
    )


def decode_data_sent_log(contract: Contract, log: Mapping[str, Any]) -> LogDecodeResult:
    """
    Try to decode a single log as a DataSentToTarget event.

    Logs emitted by other contracts or other events are classified as foreign
    instead of raising.

    Args:
        contract: Web3 contract bound to the DataContract ABI
        log: Raw log entry from a transaction receipt

    Returns:
        LogDecodeResult holding either the decoded event or the mismatch reason
    """
    log_index = log.get("logIndex")
    address = log.get("address")

    try:
        decoded = contract.events.DataSentToTarget().process_log(log)
    except (Web3Exception, DecodingError) as e:
        logger.debug(f"Log {log_index} is not a {DATA_SENT_EVENT} event: {e}")
        return LogDecodeResult(log_index=log_index, address=address, reason=str(e))

    if decoded["event"] != DATA_SENT_EVENT:
        return LogDecodeResult(
            log_index=log_index, address=address, reason=f"Unexpected event {decoded['event']}"
        )

    return LogDecodeResult(log_index=log_index, address=address, event=event_from_data(decoded))


def decode_receipt(contract: Contract, receipt: TxReceipt) -> List[LogDecodeResult]:
    """Decode every log of a receipt, preserving log order."""
    return [decode_data_sent_log(contract, log) for log in receipt.logs]


def matched_events(results: List[LogDecodeResult]) -> List[DataSentEvent]:
    return [result.event for result in results if result.matched]


def event_fields(event: DataSentEvent) -> List[Tuple[str, str]]:
    """The five event fields in emission order, labelled for display."""
    return [
        ("From", event.from_address),
        ("To", event.to_address),
        ("Owner", event.owner),
        ("Action Ref", event.actref),
        ("Topic", event.topic),
    ]
