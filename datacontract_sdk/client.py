"""
DataContractClient - Main client for the DataContract deployment.
"""
import logging
import urllib.parse
from decimal import Decimal
from typing import Dict, Any, List, Mapping, Optional, Union

from web3 import Web3
from web3.exceptions import ContractLogicError, TimeExhausted, Web3Exception
from web3.types import TxReceipt as Web3TxReceipt

from .config import NetworkConfig, explorer_for_chain
from .events import decode_data_sent_log, decode_receipt, event_from_data
from .exceptions import (
    ConfigurationError,
    NetworkError,
    TransactionError,
    TransactionRevertedError,
)
from .models import DataEntry, DataSentEvent, LogDecodeResult, TxReceipt
from .signer import Signer
from .utils import to_hex

DEFAULT_GAS = 300000
EVENT_PAGE_SIZE = 500


class DataContractClient:
    """
    Client for a deployed DataContract.

    This client handles:
    1. Sending data records with sendDataToTarget
    2. Waiting for confirmation and converting receipts
    3. Decoding DataSentToTarget events from receipts and history

    To use this client, you'll need:
    - An Ethereum RPC endpoint
    - The address of the deployed contract
    - A signer (local key or node-managed account)
    """

    # ABI for the DataContract
    DATA_CONTRACT_ABI = [
        {
            "inputs": [
                {"internalType": "address", "name": "target", "type": "address"},
                {"internalType": "bytes32", "name": "owner", "type": "bytes32"},
                {"internalType": "bytes32", "name": "actref", "type": "bytes32"},
                {"internalType": "string", "name": "topic", "type": "string"}
            ],
            "name": "sendDataToTarget",
            "outputs": [],
            "stateMutability": "nonpayable",
            "type": "function"
        },
        {
            "anonymous": False,
            "inputs": [
                {"indexed": True, "internalType": "address", "name": "from", "type": "address"},
                {"indexed": True, "internalType": "address", "name": "to", "type": "address"},
                {"indexed": False, "internalType": "bytes32", "name": "owner", "type": "bytes32"},
                {"indexed": False, "internalType": "bytes32", "name": "actref", "type": "bytes32"},
                {"indexed": False, "internalType": "string", "name": "topic", "type": "string"}
            ],
            "name": "DataSentToTarget",
            "type": "event"
        }
    ]

    def __init__(
        self,
        rpc_url: str,
        contract_address: str,
        signer: Optional[Signer] = None,
        expected_chain_id: Optional[int] = None,
        network_name: Optional[str] = None,
        receipt_timeout: float = 120,
        poll_interval: float = 0.1,
        logger: Optional[logging.Logger] = None,
        w3: Optional[Web3] = None,
    ):
        """
        Initialize the DataContractClient

        Args:
            rpc_url: Ethereum RPC endpoint URL (e.g., "https://ethereum-sepolia-rpc.publicnode.com")
            contract_address: Address of the deployed DataContract
            signer: Signer used as the sender of every transaction (optional for read-only use)
            expected_chain_id: Chain ID the RPC endpoint must report (optional)
            network_name: Name of the network in networks.json (optional)
            receipt_timeout: Seconds to wait for a transaction receipt
            poll_interval: Seconds between receipt polls
            logger: Optional logger instance to use for debug/info logging
            w3: Already connected Web3 instance to reuse (optional)

        Raises:
            ConfigurationError: If the contract address is missing or invalid
            ConfigurationError: If the RPC URL doesn't use https (unless it's localhost/127.0.0.1)
        """
        if not contract_address or not Web3.is_address(contract_address):
            raise ConfigurationError(f"Invalid contract address: {contract_address!r}")

        parsed = urllib.parse.urlparse(rpc_url)
        host = parsed.netloc.split(':')[0]
        is_local = host in ('localhost', '127.0.0.1')
        if parsed.scheme != 'https' and not is_local:
            raise ConfigurationError(f"rpc_url must use https:// for security (got: {parsed.scheme}://)")

        self.rpc_url = rpc_url
        self.contract_address = Web3.to_checksum_address(contract_address)
        self.signer = signer
        self.receipt_timeout = receipt_timeout
        self.poll_interval = poll_interval
        self.logger = logger or logging.getLogger(__name__)
        self._expected_chain_id = expected_chain_id
        self._network_name = network_name

        self.w3 = w3 or Web3(Web3.HTTPProvider(rpc_url))
        self.contract = self.w3.eth.contract(
            address=self.contract_address,
            abi=self.DATA_CONTRACT_ABI
        )

    @classmethod
    def from_network(
        cls,
        network: str,
        contract_address: str,
        signer: Optional[Signer] = None,
        rpc_url: Optional[str] = None,
        **kwargs
    ) -> "DataContractClient":
        """
        Create a client from a named network in networks.json.

        Args:
            network: Network name (e.g., "sepolia")
            contract_address: Address of the deployed DataContract
            signer: Signer for transactions
            rpc_url: Override for the network's default RPC URL
            **kwargs: Passed through to the constructor
        """
        return cls(
            rpc_url=NetworkConfig.get_rpc_url(network, rpc_url),
            contract_address=contract_address,
            signer=signer,
            expected_chain_id=NetworkConfig.get_chain_id(network),
            network_name=network,
            **kwargs
        )

    @property
    def address(self) -> str:
        """
        Address of the signer sending transactions.

        Raises:
            ConfigurationError: If the client was created without a signer
        """
        if self.signer is None:
            raise ConfigurationError("No signer available")
        return self.signer.address

    @property
    def chain_id(self) -> int:
        return self.w3.eth.chain_id

    def network_info(self) -> Dict[str, Any]:
        """Name and chain ID of the connected network, for diagnostics."""
        return {"name": self._network_name or "unknown", "chainId": self.chain_id}

    def assert_chain_id(self) -> None:
        """
        Verify the RPC endpoint is on the expected chain.

        Raises:
            NetworkError: If the chain ID differs or cannot be read
        """
        if self._expected_chain_id is None:
            self.logger.warning("No expected chain ID set; skipping chain ID validation")
            return

        try:
            actual = self.w3.eth.chain_id
        except Exception as e:
            raise NetworkError(f"Failed to validate chain ID: {e}") from e

        if actual != self._expected_chain_id:
            raise NetworkError(
                f"Chain ID mismatch for network '{self._network_name}': "
                f"expected {self._expected_chain_id}, got {actual}"
            )

    def get_balance(self, address: Optional[str] = None) -> int:
        """Balance of an address (default: the signer) in wei."""
        return self.w3.eth.get_balance(Web3.to_checksum_address(address or self.address))

    @staticmethod
    def format_ether(wei: int) -> str:
        value = Web3.from_wei(wei, 'ether')
        return format(Decimal(value).normalize(), 'f')

    def submit_data_to_target(
        self,
        entry: DataEntry,
        gas: Optional[int] = None,
        gas_price_override: Optional[int] = None,
    ) -> str:
        """
        Submit a sendDataToTarget transaction without waiting for it.

        Args:
            entry: Data record to send
            gas: Gas limit to use (if None, will be estimated or use default)
            gas_price_override: Gas price to use (if None, will use current network price)

        Returns:
            Transaction hash as a 0x-prefixed hex string

        Raises:
            TransactionError: If the call reverts, signing fails or broadcasting fails
            Web3Exception: If there's an error with Web3 operations
        """
        function = self.contract.functions.sendDataToTarget(
            entry.target,
            entry.owner,
            entry.actref,
            entry.topic
        )
        from_address = self.address
        node_managed = getattr(self.signer, "node_managed", False)

        try:
            if gas is None:
                try:
                    gas = function.estimate_gas({'from': from_address})
                    # Add 10% buffer to gas estimate
                    gas = int(gas * 1.1)
                    self.logger.debug(f"Estimated gas: {gas}")
                except ContractLogicError:
                    raise
                except Exception as e:
                    gas = DEFAULT_GAS
                    self.logger.warning(f"Gas estimation failed, using default: {gas}. Error: {e}")

            tx_params = {
                'from': from_address,
                'gas': gas,
            }
            if gas_price_override is not None:
                tx_params['gasPrice'] = gas_price_override
            else:
                tx_params['gasPrice'] = self.w3.eth.gas_price

            if not node_managed:
                tx_params['nonce'] = self.w3.eth.get_transaction_count(from_address, 'pending')
                tx_params['chainId'] = self.w3.eth.chain_id

            tx = function.build_transaction(tx_params)
        except ContractLogicError as e:
            self.logger.error(f"sendDataToTarget reverted: {e}")
            raise TransactionError(f"Transaction would revert: {e}", reason=getattr(e, "message", None)) from e

        if node_managed:
            try:
                tx_hash = self.w3.eth.send_transaction(tx)
            except ContractLogicError as e:
                raise TransactionError(f"Transaction reverted: {e}", reason=getattr(e, "message", None)) from e
        else:
            try:
                signed_tx = self.signer.sign_transaction(tx)
            except Exception as e:
                self.logger.error(f"Transaction signing failed: {e}")
                raise TransactionError(f"Failed to sign transaction: {str(e)}") from e

            try:
                tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
            except Exception as e:
                self.logger.error(f"Failed to send transaction: {e}")
                if isinstance(e, Web3Exception):
                    raise  # Re-raise Web3 exceptions directly
                raise TransactionError(f"Failed to send transaction: {str(e)}") from e

        tx_hash_hex = to_hex(tx_hash)
        self.logger.info(f"Transaction sent: {tx_hash_hex}")
        return tx_hash_hex

    def wait_for_receipt(self, tx_hash: Union[str, bytes]) -> Optional[TxReceipt]:
        """
        Wait for a transaction to be mined.

        Args:
            tx_hash: Hash returned by submit_data_to_target

        Returns:
            The converted receipt, or None if no receipt arrived before the timeout

        Raises:
            TransactionRevertedError: If the transaction was mined with status 0
        """
        tx_hash_hex = to_hex(tx_hash)
        self.logger.debug(f"Waiting for receipt of {tx_hash_hex}")
        try:
            web3_receipt = self.w3.eth.wait_for_transaction_receipt(
                tx_hash_hex,
                timeout=self.receipt_timeout,
                poll_latency=self.poll_interval
            )
        except TimeExhausted as e:
            self.logger.warning(f"No receipt for {tx_hash_hex}: {e}")
            return None

        if web3_receipt is None:
            return None

        receipt = self._convert_receipt(web3_receipt)
        if receipt.status != 1:
            raise TransactionRevertedError(
                f"Transaction {tx_hash_hex} reverted in block {receipt.block_number}",
                tx_hash=tx_hash_hex
            )
        return receipt

    def send_data_to_target(self, entry: DataEntry, **kwargs) -> Optional[TxReceipt]:
        """Submit a data entry and wait for its receipt (None if none arrived)."""
        tx_hash = self.submit_data_to_target(entry, **kwargs)
        return self.wait_for_receipt(tx_hash)

    def decode_log(self, log: Mapping[str, Any]) -> LogDecodeResult:
        """Classify one log as a DataSentToTarget event or a foreign log."""
        return decode_data_sent_log(self.contract, log)

    def decode_receipt_logs(self, receipt: TxReceipt) -> List[LogDecodeResult]:
        return decode_receipt(self.contract, receipt)

    def get_data_sent_events(
        self,
        from_block: Optional[int] = None,
        to_block: Optional[int] = None,
        sender: Optional[str] = None,
        target: Optional[str] = None,
    ) -> List[DataSentEvent]:
        """
        Search for DataSentToTarget events.

        The range is queried in pages of EVENT_PAGE_SIZE blocks to stay within
        the log limits of public RPC endpoints.

        Args:
            from_block: Starting block number (inclusive). If None, the last page of blocks.
            to_block: Ending block number (inclusive). If None, the latest block.
            sender: Filter by the indexed ``from`` address
            target: Filter by the indexed ``to`` address

        Returns:
            Decoded events in chain order
        """
        argument_filters = {}
        if sender is not None:
            argument_filters["from"] = Web3.to_checksum_address(sender)
        if target is not None:
            argument_filters["to"] = Web3.to_checksum_address(target)

        if to_block is None:
            to_block = self.w3.eth.block_number
        if from_block is None:
            from_block = max(0, to_block - EVENT_PAGE_SIZE + 1)
        if from_block > to_block:
            raise ValueError(f"from_block ({from_block}) is after to_block ({to_block})")

        events: List[DataSentEvent] = []
        start = from_block
        while start <= to_block:
            end = min(start + EVENT_PAGE_SIZE - 1, to_block)
            self.logger.debug(f"Fetching DataSentToTarget logs for blocks {start}-{end}")
            logs = self.contract.events.DataSentToTarget().get_logs(
                argument_filters=argument_filters,
                from_block=start,
                to_block=end
            )
            events.extend(event_from_data(log) for log in logs)
            start = end + 1
        return events

    def _explorer_host(self) -> str:
        if self._network_name:
            try:
                explorer = NetworkConfig.get_explorer(self._network_name)
                if explorer:
                    return explorer
            except ValueError:
                pass
        chain_id = self._expected_chain_id
        if chain_id is None:
            chain_id = self.w3.eth.chain_id
        return explorer_for_chain(chain_id)

    def address_url(self, address: Optional[str] = None) -> str:
        """Block explorer link for an address (default: the contract)."""
        return f"https://{self._explorer_host()}/address/{address or self.contract_address}"

    def tx_url(self, tx_hash: Union[str, bytes]) -> str:
        """Block explorer link for a transaction."""
        return f"https://{self._explorer_host()}/tx/{to_hex(tx_hash)}"

    def _convert_receipt(self, web3_receipt: Web3TxReceipt) -> TxReceipt:
        """
        Convert Web3 receipt to our TxReceipt model

        Log entries are kept as plain dicts with their original values so they
        can still be decoded against the contract ABI.
        """
        receipt_dict = dict(web3_receipt)

        # Convert bytes to hex strings
        for key, value in list(receipt_dict.items()):
            if isinstance(value, bytes):
                receipt_dict[key] = to_hex(value)
        receipt_dict['logs'] = [dict(log) for log in receipt_dict.get('logs', [])]

        return TxReceipt.model_validate(receipt_dict)
