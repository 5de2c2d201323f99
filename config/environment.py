"""
Environment configuration for the gateway
Loads settings from environment variables or .env.local / .env files
"""
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv
from web3 import Web3

from config.chains import ChainConfig, DEFAULT_CHAIN, CHAINS, find_chain
from config.settings import DEFAULT_HOST, DEFAULT_PORT, ENV_FILES, LOG_LEVEL
from core.errors import ConfigurationError

# Chain-independent fallback for the resolver address
FALLBACK_RESOLVER_ADDRESS_ENV = "AGENT_DELEGATIONS_RESOLVER_ADDRESS"


@dataclass(frozen=True)
class GatewayConfig:
    """Immutable process configuration read once at startup"""
    chain: ChainConfig
    rpc_urls: tuple[str, ...]
    resolver_address: str
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = LOG_LEVEL
    access_log: bool = False


def load_env_files(filenames: tuple[str, ...] = ENV_FILES) -> None:
    """
    Load env files from the working directory.
    Variables already present in the environment are never overridden,
    so earlier files take precedence over later ones.
    """
    for filename in filenames:
        path = os.path.join(os.getcwd(), filename)
        if os.path.exists(path):
            load_dotenv(path, override=False)


def _split_urls(value: str) -> tuple[str, ...]:
    return tuple(url.strip() for url in value.split(",") if url.strip())


def _parse_port(value: Optional[str]) -> int:
    if not value:
        return DEFAULT_PORT
    try:
        port = int(value)
    except ValueError:
        raise ConfigurationError(f"PORT must be an integer, got {value!r}") from None
    if not 0 <= port <= 65535:
        raise ConfigurationError(f"PORT out of range: {port}")
    return port


def _parse_flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


def load_config(environ: Optional[Mapping[str, str]] = None) -> GatewayConfig:
    """
    Build the gateway configuration.

    Args:
        environ: Mapping to read from. Defaults to os.environ after loading
            the env files.

    Raises:
        ConfigurationError: If the RPC URL or resolver address is missing,
            or if any value is malformed.
    """
    if environ is None:
        load_env_files()
        environ = os.environ

    chain_key = environ.get("GATEWAY_CHAIN")
    if chain_key:
        chain = find_chain(chain_key)
        if chain is None:
            known = ", ".join(c.key for c in CHAINS.values())
            raise ConfigurationError(f"Unknown GATEWAY_CHAIN {chain_key!r} (expected one of: {known})")
    else:
        chain = CHAINS[DEFAULT_CHAIN]

    rpc_urls = _split_urls(environ.get(chain.rpc_url_env, ""))
    if not rpc_urls:
        raise ConfigurationError(f"{chain.rpc_url_env} is required")

    resolver_address = (
        environ.get(chain.resolver_address_env)
        or environ.get(FALLBACK_RESOLVER_ADDRESS_ENV)
    )
    if not resolver_address:
        raise ConfigurationError(
            f"{chain.resolver_address_env} (or {FALLBACK_RESOLVER_ADDRESS_ENV}) is required"
        )
    if not Web3.is_address(resolver_address):
        raise ConfigurationError(f"Invalid resolver address: {resolver_address}")

    return GatewayConfig(
        chain=chain,
        rpc_urls=rpc_urls,
        resolver_address=Web3.to_checksum_address(resolver_address),
        host=environ.get("HOST") or DEFAULT_HOST,
        port=_parse_port(environ.get("PORT")),
        log_level=(environ.get("LOG_LEVEL") or LOG_LEVEL).upper(),
        access_log=_parse_flag(environ.get("ACCESS_LOG")),
    )
