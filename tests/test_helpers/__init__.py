from .client_creator import (
    create_test_client,
    TEST_RPC_URL,
    TEST_CONTRACT,
    TEST_PRIV_KEY,
    TEST_SENDER,
    TEST_TARGET,
)
from .logs import make_data_sent_log, make_foreign_log, make_web3_receipt

__all__ = [
    "create_test_client",
    "TEST_RPC_URL",
    "TEST_CONTRACT",
    "TEST_PRIV_KEY",
    "TEST_SENDER",
    "TEST_TARGET",
    "make_data_sent_log",
    "make_foreign_log",
    "make_web3_receipt",
]
