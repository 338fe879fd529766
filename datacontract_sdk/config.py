"""
Network and run configuration for the DataContract SDK.
"""
import json
import logging
import os
import importlib.resources
from dataclasses import dataclass
from typing import Dict, Any, List, Mapping, Optional

from web3 import Web3

from .exceptions import ConfigurationError
from .signer import Signer, LocalSigner, NodeSigner

logger = logging.getLogger(__name__)

DEFAULT_NETWORK = "sepolia"

# Explorer hosts used when the network table has no entry for a chain
EXPLORERS_BY_CHAIN_ID = {
    1: "etherscan.io",
    11155111: "sepolia.etherscan.io",
}
FALLBACK_EXPLORER = "blockscan.com"


class NetworkConfig:
    """Access to the packaged networks.json table."""

    _networks_cache: Optional[Dict[str, Dict[str, Any]]] = None

    @classmethod
    def load_networks(cls) -> Dict[str, Dict[str, Any]]:
        """
        Load network definitions, caching them after the first read.

        Returns:
            Mapping of network name to its chainId, rpc and explorer entries
        """
        if cls._networks_cache is None:
            resource = importlib.resources.files("datacontract_sdk").joinpath("networks.json")
            cls._networks_cache = json.loads(resource.read_text(encoding="utf-8"))
        return cls._networks_cache

    @classmethod
    def get_network(cls, network: str) -> Dict[str, Any]:
        """
        Get the configuration for a named network.

        Raises:
            ValueError: If the network is unknown
        """
        networks = cls.load_networks()
        if network not in networks:
            available = ", ".join(sorted(networks))
            raise ValueError(f"Network '{network}' not found. Available networks: {available}")
        return networks[network]

    @classmethod
    def get_rpc_url(cls, network: str, override: Optional[str] = None) -> str:
        """
        RPC URL for a network.

        Precedence: explicit override, then <NETWORK>_RPC_URL (e.g. SEPOLIA_RPC_URL),
        then RPC_URL, then the packaged default.
        """
        if override:
            return override
        env_var = f"{network.upper().replace('-', '_')}_RPC_URL"
        env_rpc = os.environ.get(env_var) or os.environ.get("RPC_URL")
        if env_rpc:
            return env_rpc
        return cls.get_network(network)["rpc"]

    @classmethod
    def get_chain_id(cls, network: str) -> int:
        return int(cls.get_network(network)["chainId"])

    @classmethod
    def get_explorer(cls, network: str) -> Optional[str]:
        return cls.get_network(network).get("explorer")


def explorer_for_chain(chain_id: Optional[int]) -> str:
    """Explorer host for a chain id, falling back to blockscan."""
    return EXPLORERS_BY_CHAIN_ID.get(chain_id, FALLBACK_EXPLORER)


@dataclass
class RunConfig:
    """
    Everything the interaction run needs, resolved once at startup.

    Attributes:
        contract_address: Checksummed address of the deployed DataContract
        signer: Sender of every transaction (also used as the target)
        network: Network name from networks.json
        rpc_url: RPC endpoint the run talks to
    """
    contract_address: str
    signer: Signer
    network: str
    rpc_url: str


def read_contract_address(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Read CONTRACT_ADDRESS from the environment; blank values count as unset."""
    env = os.environ if environ is None else environ
    value = env.get("CONTRACT_ADDRESS", "").strip()
    return value or None


def resolve_signers(w3: Web3, private_keys: Optional[str] = None) -> List[Signer]:
    """
    Build the list of available signers.

    Keys given as a comma-separated string take precedence; otherwise the
    accounts unlocked on the connected node are used.

    Args:
        w3: Connected Web3 instance
        private_keys: Comma-separated private keys (e.g. from PRIVATE_KEY)

    Returns:
        Signers in the order they were provided (possibly empty)
    """
    if private_keys:
        keys = [key.strip() for key in private_keys.split(",") if key.strip()]
        try:
            return [LocalSigner(key) for key in keys]
        except Exception as e:
            raise ConfigurationError(f"Invalid private key: {e}") from e

    accounts = w3.eth.accounts
    logger.debug(f"Node reported {len(accounts)} unlocked account(s)")
    return [NodeSigner(account) for account in accounts]


def load_run_config(
    w3: Web3,
    contract_address: str,
    network: str = DEFAULT_NETWORK,
    rpc_url: Optional[str] = None,
    private_keys: Optional[str] = None,
) -> RunConfig:
    """
    Resolve the signer and assemble the run configuration.

    Raises:
        ConfigurationError: If the address is invalid or no signer is available
    """
    if not contract_address or not Web3.is_address(contract_address):
        raise ConfigurationError(f"Invalid contract address: {contract_address!r}")

    signers = resolve_signers(w3, private_keys)
    if not signers:
        raise ConfigurationError("No signers available")

    return RunConfig(
        contract_address=Web3.to_checksum_address(contract_address),
        signer=signers[0],
        network=network,
        rpc_url=rpc_url or NetworkConfig.get_rpc_url(network),
    )
