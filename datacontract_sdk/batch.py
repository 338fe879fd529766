"""
Sequential sending of several data entries.
"""
import logging
from typing import Callable, Iterable, List, Optional, TYPE_CHECKING

from .models import BatchOutcome, DataEntry

if TYPE_CHECKING:
    from .client import DataContractClient

logger = logging.getLogger(__name__)

NULL_RECEIPT_ERROR = "Receipt is null"


def send_batch(
    client: "DataContractClient",
    entries: Iterable[DataEntry],
    on_start: Optional[Callable[[int, int], None]] = None,
    on_submitted: Optional[Callable[[int, str], None]] = None,
    on_finished: Optional[Callable[[BatchOutcome], None]] = None,
) -> List[BatchOutcome]:
    """
    Send entries one after another and collect an outcome for each.

    Every entry is attempted exactly once. A failing entry is recorded and the
    remaining entries are still sent. Each transaction is confirmed before the
    next one is submitted so nonces never race.

    Args:
        client: Client bound to the deployed contract
        entries: Entries to send, in order
        on_start: Called with (1-based index, total) before an entry is submitted
        on_submitted: Called with (1-based index, tx hash) once an entry is broadcast
        on_finished: Called with the entry's outcome before the next entry starts

    Returns:
        One BatchOutcome per entry, in the same order
    """
    entries = list(entries)
    outcomes: List[BatchOutcome] = []
    for index, entry in enumerate(entries, start=1):
        if on_start is not None:
            on_start(index, len(entries))
        tx_hash = None
        try:
            tx_hash = client.submit_data_to_target(entry)
            if on_submitted is not None:
                on_submitted(index, tx_hash)
            receipt = client.wait_for_receipt(tx_hash)
        except Exception as e:
            logger.warning(f"Batch entry {index} failed: {e}")
            outcome = BatchOutcome(
                index=index,
                entry=entry,
                success=False,
                tx_hash=tx_hash,
                error=str(e),
                reason=getattr(e, "reason", None),
            )
        else:
            if receipt is None:
                outcome = BatchOutcome(
                    index=index, entry=entry, success=False, tx_hash=tx_hash, error=NULL_RECEIPT_ERROR
                )
            else:
                outcome = BatchOutcome(
                    index=index,
                    entry=entry,
                    success=True,
                    tx_hash=tx_hash,
                    block_number=receipt.block_number,
                )

        outcomes.append(outcome)
        if on_finished is not None:
            on_finished(outcome)
    return outcomes
