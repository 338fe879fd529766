"""
Pytest fixtures for the DataContract SDK tests.
"""
import pytest
from unittest.mock import MagicMock
from eth_account import Account
from web3 import Web3
from web3.providers.rpc import HTTPProvider

from datacontract_sdk.client import DataContractClient
from datacontract_sdk.config import NetworkConfig
from tests.test_helpers import (
    TEST_RPC_URL,
    TEST_CONTRACT,
    TEST_PRIV_KEY,
    make_web3_receipt,
)


@pytest.fixture(autouse=True)
def _patch_http_provider(monkeypatch):
    """
    Stub every Web3 HTTP call so no DNS / network traffic is triggered.
    Works for all tests because it is autouse.
    """
    def _dummy(self, method, params=None, _=None):      # signature match
        if method in {"eth_chainId"}:
            return {"jsonrpc": "2.0", "id": 1, "result": "0xaa36a7"}    # sepolia
        if method in {"eth_gasPrice"}:
            return {"jsonrpc": "2.0", "id": 1, "result": "0x3b9aca00"}  # 1 gwei
        if method in {"eth_accounts"}:
            return {"jsonrpc": "2.0", "id": 1, "result": []}
        # everything else – return something harmless
        return {"jsonrpc": "2.0", "id": 1, "result": "0x0"}

    monkeypatch.setattr(HTTPProvider, "make_request", _dummy, raising=True)


@pytest.fixture(autouse=True)
def _reset_network_cache():
    NetworkConfig._networks_cache = None
    yield
    NetworkConfig._networks_cache = None


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for name in ("CONTRACT_ADDRESS", "RPC_URL", "PRIVATE_KEY", "DATACONTRACT_NETWORK"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def mock_account():
    """Create a deterministic test account"""
    return Account.from_key(TEST_PRIV_KEY)


@pytest.fixture
def data_contract():
    """A real web3 contract object bound to the DataContract ABI (no network needed)."""
    w3 = Web3(Web3.HTTPProvider(TEST_RPC_URL))
    return w3.eth.contract(address=TEST_CONTRACT, abi=DataContractClient.DATA_CONTRACT_ABI)


@pytest.fixture
def mock_w3():
    """
    Create a mock Web3 instance modelling a Sepolia node.
    """
    w3 = MagicMock(spec=Web3)
    eth = MagicMock()
    eth.chain_id = 11155111
    eth.gas_price = 1000000000  # 1 gwei
    eth.block_number = 12345
    eth.get_transaction_count = MagicMock(return_value=7)
    eth.get_balance = MagicMock(return_value=1500000000000000000)
    eth.send_raw_transaction = MagicMock(return_value=bytes.fromhex("12" * 32))
    eth.send_transaction = MagicMock(return_value=bytes.fromhex("34" * 32))
    eth.wait_for_transaction_receipt = MagicMock(return_value=make_web3_receipt())
    w3.eth = eth
    return w3


@pytest.fixture
def mock_contract():
    """Contract mock whose sendDataToTarget call builds a deterministic tx."""
    contract = MagicMock()
    function = MagicMock()
    function.estimate_gas = MagicMock(return_value=100000)

    def build_tx(tx_params):
        return {**tx_params, "to": TEST_CONTRACT, "data": "0xabcdef"}

    function.build_transaction = MagicMock(side_effect=build_tx)
    contract.functions.sendDataToTarget = MagicMock(return_value=function)
    return contract
