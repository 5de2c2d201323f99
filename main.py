#!/usr/bin/env python3
"""
Agent Delegations Offchain Resolver
===================================
CCIP-Read (EIP-3668) gateway answering text/data lookups for the agent
delegations resolver from its on-chain counterpart

Configuration (environment, .env.local or .env):
    BASE_SEPOLIA_RPC_URL                              RPC endpoint(s), comma separated
    BASE_SEPOLIA_AGENT_DELEGATIONS_RESOLVER_ADDRESS   resolver contract
    GATEWAY_CHAIN, HOST, PORT, LOG_LEVEL, ACCESS_LOG  optional

Usage:
    python main.py
"""
import asyncio
import sys

from api.server import GatewayServer
from config.environment import load_config
from core.errors import ConfigurationError
from core.gateway import OffchainGateway
from core.network.chain_reader import Web3ChainReader
from utils.logger import setup_logging, get_logger
from utils.rpc_manager import RPCManager

logger = get_logger(__name__)


async def main():
    """Main entry point"""
    try:
        config = load_config()
    except ConfigurationError as e:
        setup_logging()
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    setup_logging(config.log_level, access_log=config.access_log)
    logger.info(f"Reading resolver {config.resolver_address} on {config.chain.name}")

    rpc_manager = RPCManager(config.rpc_urls)
    gateway = OffchainGateway(Web3ChainReader(rpc_manager, config.resolver_address))
    server = GatewayServer(
        gateway, host=config.host, port=config.port, access_log=config.access_log
    )

    try:
        await server.start()
        await asyncio.Event().wait()
    finally:
        logger.info("Shutting down...")
        await server.stop()
        await rpc_manager.close()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
