#!/usr/bin/env python3
"""
Simple example of using the DataContract SDK.
"""
import os
from datacontract_sdk import DataContractClient, DataEntry, LocalSigner

def main():
    """
    Demonstrate basic usage of the DataContractClient.

    This example shows how to:
    1. Initialize the client for Sepolia
    2. Build a data entry from short labels
    3. Send it and print the decoded event
    """
    # Read configuration from environment
    CONTRACT_ADDRESS = os.environ.get("CONTRACT_ADDRESS")
    PRIVATE_KEY = os.environ.get("PRIVATE_KEY")

    # Verify configuration
    if not CONTRACT_ADDRESS:
        print("ERROR: CONTRACT_ADDRESS environment variable is required")
        return

    if not PRIVATE_KEY:
        print("ERROR: PRIVATE_KEY environment variable is required")
        return

    signer = LocalSigner(PRIVATE_KEY)
    client = DataContractClient.from_network(
        network="sepolia",
        contract_address=CONTRACT_ADDRESS,
        signer=signer
    )

    entry = DataEntry.from_labels(
        target=signer.address,
        owner="OWNER_EXAMPLE",
        actref="REF_EXAMPLE_001",
        topic="Hello from the Python SDK"
    )

    try:
        tx_receipt = client.send_data_to_target(entry)
        if tx_receipt is None:
            print("No receipt received before the timeout")
            return

        print(f"Data sent successfully!")
        print(f"Transaction hash: {tx_receipt.tx_hash}")
        print(f"Block number: {tx_receipt.block_number}")
        print(f"Explorer: {client.tx_url(tx_receipt.tx_hash)}")

        for result in client.decode_receipt_logs(tx_receipt):
            if result.event is not None:
                print(f"Event topic: {result.event.topic} (owner {result.event.owner_label})")

    except Exception as e:
        print(f"Error sending data: {str(e)}")

if __name__ == "__main__":
    main()
