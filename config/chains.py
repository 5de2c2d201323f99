"""
Chain configurations for the resolver contract the gateway reads from
"""
from dataclasses import dataclass
from enum import Enum


class ChainId(Enum):
    """Blockchain chain IDs"""
    ETHEREUM = 1
    SEPOLIA = 11155111
    BASE = 8453
    BASE_SEPOLIA = 84532


@dataclass(frozen=True)
class ChainConfig:
    """Configuration for a blockchain"""
    chain_id: ChainId
    name: str

    # Environment variables carrying the RPC URL and the resolver address
    rpc_url_env: str
    resolver_address_env: str

    @property
    def key(self) -> str:
        """Lowercase identifier used by GATEWAY_CHAIN, e.g. "base_sepolia" """
        return self.chain_id.name.lower()


CHAINS: dict[ChainId, ChainConfig] = {
    ChainId.BASE_SEPOLIA: ChainConfig(
        chain_id=ChainId.BASE_SEPOLIA,
        name="Base Sepolia",
        rpc_url_env="BASE_SEPOLIA_RPC_URL",
        resolver_address_env="BASE_SEPOLIA_AGENT_DELEGATIONS_RESOLVER_ADDRESS",
    ),

    ChainId.BASE: ChainConfig(
        chain_id=ChainId.BASE,
        name="Base",
        rpc_url_env="BASE_RPC_URL",
        resolver_address_env="BASE_AGENT_DELEGATIONS_RESOLVER_ADDRESS",
    ),

    ChainId.ETHEREUM: ChainConfig(
        chain_id=ChainId.ETHEREUM,
        name="Ethereum",
        rpc_url_env="ETHEREUM_RPC_URL",
        resolver_address_env="ETHEREUM_AGENT_DELEGATIONS_RESOLVER_ADDRESS",
    ),

    ChainId.SEPOLIA: ChainConfig(
        chain_id=ChainId.SEPOLIA,
        name="Sepolia",
        rpc_url_env="SEPOLIA_RPC_URL",
        resolver_address_env="SEPOLIA_AGENT_DELEGATIONS_RESOLVER_ADDRESS",
    ),
}

DEFAULT_CHAIN: ChainId = ChainId.BASE_SEPOLIA


def find_chain(key: str) -> ChainConfig | None:
    """Look up a chain by its GATEWAY_CHAIN key or numeric chain id"""
    key = key.strip().lower()
    for config in CHAINS.values():
        if key == config.key or key == str(config.chain_id.value):
            return config
    return None
