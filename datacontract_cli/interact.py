"""
Interaction commands for a deployed DataContract.

``interact`` sends one demonstration record, prints the emitted event, then
sends a small batch of records. ``events`` lists DataSentToTarget history.
"""
import logging
from typing import Any, Callable, List, Optional

import typer
from web3 import Web3

from datacontract_sdk import (
    DataContractClient,
    DataEntry,
    NetworkConfig,
    RunConfig,
    TxReceipt,
    load_run_config,
    read_contract_address,
    send_batch,
)
from datacontract_sdk.config import DEFAULT_NETWORK
from datacontract_sdk.events import event_fields, matched_events
from datacontract_sdk.models import BatchOutcome
from datacontract_sdk.exceptions import ConfigurationError
from datacontract_sdk.utils import to_hex

app = typer.Typer(help="Interact with a deployed DataContract.", no_args_is_help=True)

Echo = Callable[..., None]

DEMO_TOPIC = "Test Topic - Sepolia Contract Interaction"


def demo_entry(target: str) -> DataEntry:
    return DataEntry.from_labels(target, "OWNER_001", "ACTION_REF_123", DEMO_TOPIC)


def batch_entries(target: str) -> List[DataEntry]:
    return [
        DataEntry.from_labels(target, "OWNER_002", "REF_BATCH_001", "Sepolia Batch Entry 1"),
        DataEntry.from_labels(target, "OWNER_003", "REF_BATCH_002", "Sepolia Batch Entry 2"),
    ]


def build_web3(rpc_url: str) -> Web3:
    return Web3(Web3.HTTPProvider(rpc_url))


def error_reason(exc: BaseException) -> Optional[str]:
    """Revert reason carried by an exception, if any."""
    reason: Any = getattr(exc, "reason", None)
    return str(reason) if reason else None


def report_events(client: DataContractClient, receipt: TxReceipt, echo: Echo = typer.echo) -> int:
    """
    Print the fields of every DataSentToTarget event in a receipt.

    Returns:
        Number of matching events printed
    """
    echo(f"Found {len(receipt.logs)} logs in transaction")
    found = matched_events(client.decode_receipt_logs(receipt))
    for event in found:
        echo("\n=== Event Details ===")
        for label, value in event_fields(event):
            echo(f"{label}: {value}")
    return len(found)


def report_outcome(outcome: BatchOutcome, echo: Echo = typer.echo) -> None:
    if outcome.success:
        echo(f"✓ Batch entry {outcome.index} sent successfully (Block: {outcome.block_number})")
    else:
        echo(f"✗ Batch entry {outcome.index} failed: {outcome.error}", err=True)


def run_interaction(client: DataContractClient, config: RunConfig, echo: Echo = typer.echo) -> int:
    """
    Run the demonstration flow against a bound client.

    Args:
        client: Client bound to the deployed contract with the run's signer
        config: Resolved run configuration
        echo: Output function (typer.echo compatible)

    Returns:
        Process exit status
    """
    caller = config.signer.address
    echo(f"Deployer address: {caller}")

    echo("\n=== Contract Information ===")
    echo(f"Contract address: {config.contract_address}")
    info = client.network_info()
    echo(f"Network: {info['name']} (chain id {info['chainId']})")
    echo(f"Current caller: {caller}")

    echo("\n=== Sending Data to Target ===")
    entry = demo_entry(caller)
    echo(f"Target address: {entry.target}")
    echo(f"Owner param: {to_hex(entry.owner)}")
    echo(f"Action reference: {to_hex(entry.actref)}")
    echo(f"Topic: {entry.topic}")

    try:
        balance = client.get_balance(caller)
        echo(f"Account balance: {client.format_ether(balance)} ETH")

        echo("\nSending data to target...")
        tx_hash = client.submit_data_to_target(entry)
        echo(f"Transaction hash: {tx_hash}")
        echo("Waiting for confirmation...")

        receipt = client.wait_for_receipt(tx_hash)
        if receipt is None:
            echo("Transaction receipt is null", err=True)
            return 1

        echo(f"Transaction confirmed in block: {receipt.block_number}")
        echo(f"Gas used: {receipt.gas_used}")
        report_events(client, receipt, echo)
    except Exception as e:
        echo(f"Error sending data: {e}", err=True)
        reason = error_reason(e)
        if reason:
            echo(f"Reason: {reason}", err=True)

    echo("\n=== Multiple Data Sends ===")
    send_batch(
        client,
        batch_entries(caller),
        on_start=lambda index, total: echo(f"\nSending batch entry {index}/{total}..."),
        on_submitted=lambda index, tx: echo(f"Transaction hash: {tx}"),
        on_finished=lambda outcome: report_outcome(outcome, echo),
    )

    echo("\n=== Interaction Complete ===")
    echo("Contract interaction script finished successfully!")
    echo("View transactions on the block explorer:")
    echo(client.address_url(config.contract_address))
    return 0


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def interact(
    contract_address: Optional[str] = typer.Option(
        None, "--contract-address", help="Deployed DataContract address (default: $CONTRACT_ADDRESS)"
    ),
    network: str = typer.Option(
        DEFAULT_NETWORK, "--network", envvar="DATACONTRACT_NETWORK", help="Network name from networks.json"
    ),
    rpc_url: Optional[str] = typer.Option(
        None, "--rpc-url", help="Override the network's RPC endpoint (default: $<NETWORK>_RPC_URL, then $RPC_URL)"
    ),
    private_key: Optional[str] = typer.Option(
        None, "--private-key", envvar="PRIVATE_KEY", show_default=False,
        help="Comma-separated private keys; node accounts are used when omitted"
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Send demonstration records to the contract and print the emitted events."""
    _setup_logging(debug)
    typer.echo("=== DataContract Interaction Script ===\n")
    contract_address = contract_address or read_contract_address()

    if not contract_address:
        typer.echo("Error: CONTRACT_ADDRESS environment variable not set", err=True)
        typer.echo("Please set CONTRACT_ADDRESS to the deployed contract address")
        typer.echo("Example: CONTRACT_ADDRESS=0x... datacontract-cli interact")
        raise typer.Exit(code=1)

    try:
        rpc = NetworkConfig.get_rpc_url(network, rpc_url)
        w3 = build_web3(rpc)
        try:
            config = load_run_config(w3, contract_address, network, rpc, private_key)
        except ConfigurationError as e:
            typer.echo(f"Error: {e}", err=True)
            code = 1
        else:
            client = DataContractClient.from_network(
                config.network, config.contract_address, config.signer, rpc_url=config.rpc_url, w3=w3
            )
            client.assert_chain_id()
            code = run_interaction(client, config)
    except Exception as e:
        typer.echo(f"Script failed: {e}", err=True)
        code = 1

    raise typer.Exit(code=code)


@app.command()
def events(
    contract_address: Optional[str] = typer.Option(
        None, "--contract-address", help="Deployed DataContract address (default: $CONTRACT_ADDRESS)"
    ),
    network: str = typer.Option(
        DEFAULT_NETWORK, "--network", envvar="DATACONTRACT_NETWORK", help="Network name from networks.json"
    ),
    rpc_url: Optional[str] = typer.Option(
        None, "--rpc-url", help="Override the network's RPC endpoint (default: $<NETWORK>_RPC_URL, then $RPC_URL)"
    ),
    from_block: Optional[int] = typer.Option(None, "--from-block", help="First block to scan"),
    to_block: Optional[int] = typer.Option(None, "--to-block", help="Last block to scan"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """List DataSentToTarget events emitted by the contract."""
    _setup_logging(debug)
    contract_address = contract_address or read_contract_address()

    if not contract_address:
        typer.echo("Error: CONTRACT_ADDRESS environment variable not set", err=True)
        raise typer.Exit(code=1)

    try:
        client = DataContractClient.from_network(network, contract_address, rpc_url=rpc_url)
        found = client.get_data_sent_events(from_block=from_block, to_block=to_block)
    except Exception as e:
        typer.echo(f"Failed to fetch events: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Found {len(found)} DataSentToTarget event(s)")
    for event in found:
        typer.echo(f"\nBlock {event.block_number} tx {event.tx_hash}")
        for label, value in event_fields(event):
            typer.echo(f"  {label}: {value}")
        if event.owner_label is not None or event.actref_label is not None:
            typer.echo(f"  Labels: owner={event.owner_label} actref={event.actref_label}")


def main():
    app()


if __name__ == "__main__":
    main()
