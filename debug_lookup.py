"""
Resolve one lookup through the gateway pipeline against the configured chain.

Usage:
    python debug_lookup.py alice.agents.eth avatar
    python debug_lookup.py 0x<node> delegations --data
"""
import argparse
import asyncio

from config.environment import load_config
from core.abi import decode_lookup_result, encode_lookup_request
from core.errors import GatewayError
from core.gateway import OffchainGateway
from core.lookup import LookupKind, namehash
from core.network.chain_reader import Web3ChainReader
from utils.logger import console, setup_logging
from utils.rpc_manager import RPCManager


def parse_node(target: str) -> bytes:
    if target.startswith("0x") and len(target) == 66:
        return bytes.fromhex(target[2:])
    return namehash(target)


def parse_args(argv: list[str] | None = None) -> tuple[argparse.Namespace, bytes]:
    """Parse the command line; a malformed node exits with a usage error"""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("target", help="ENS name or 0x-prefixed 32-byte node")
    parser.add_argument("key", help="Record key")
    parser.add_argument("--data", action="store_true", help="Data lookup instead of text")
    args = parser.parse_args(argv)

    try:
        node = parse_node(args.target)
    except ValueError as e:
        parser.error(f"invalid node {args.target!r}: {e}")
    return args, node


async def main():
    args, node = parse_args()

    config = load_config()
    setup_logging(config.log_level)

    kind = LookupKind.DATA if args.data else LookupKind.TEXT
    payload = encode_lookup_request(kind, node, args.key)
    console.print(f"Request: 0x{payload.hex()}")

    rpc_manager = RPCManager(config.rpc_urls)
    gateway = OffchainGateway(Web3ChainReader(rpc_manager, config.resolver_address))
    try:
        response = await gateway.handle(payload)
    except GatewayError as e:
        console.print(f"Error: {e}")
        return
    finally:
        await rpc_manager.close()

    value = decode_lookup_result(kind, response)
    console.print(f"Response: 0x{response.hex()}")
    console.print(f"{kind.function_name}({args.key!r}) = {value!r}")


if __name__ == "__main__":
    asyncio.run(main())
