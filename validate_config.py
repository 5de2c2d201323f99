"""
Validation script to check the gateway deployment configuration:
every RPC endpoint must serve the configured chain, and the resolver
address must hold contract code there
"""
import asyncio
import sys

from config.environment import load_config
from core.errors import ConfigurationError
from utils.logger import console
from utils.rpc_manager import RPCManager


async def validate_endpoints(rpc_manager: RPCManager, expected_chain_id: int) -> bool:
    console.print("Checking RPC endpoints...")
    ok = True
    for url in rpc_manager.rpc_urls:
        try:
            chain_id = await rpc_manager.get_chain_id(url)
        except Exception as e:
            console.print(f"❌ {url} unreachable: {e}")
            ok = False
            continue

        if chain_id != expected_chain_id:
            console.print(f"❌ {url} serves chain {chain_id}, expected {expected_chain_id}")
            ok = False
        else:
            console.print(f"✓ {url} OK (chain {chain_id})")
    return ok


async def validate_resolver(rpc_manager: RPCManager, address: str) -> bool:
    console.print("\nChecking resolver contract...")
    try:
        code = await rpc_manager.call(lambda web3: web3.eth.get_code(address))
    except Exception as e:
        console.print(f"❌ Could not fetch code for {address}: {e}")
        return False

    if not code:
        console.print(f"❌ No contract deployed at {address}")
        return False

    console.print(f"✓ Resolver {address} OK ({len(code)} bytes of code)")
    return True


async def main() -> int:
    try:
        config = load_config()
    except ConfigurationError as e:
        console.print(f"❌ Invalid configuration: {e}")
        return 1

    console.print(f"Chain: {config.chain.name} ({config.chain.chain_id.value})\n")
    rpc_manager = RPCManager(config.rpc_urls)
    try:
        endpoints_ok = await validate_endpoints(rpc_manager, config.chain.chain_id.value)
        resolver_ok = await validate_resolver(rpc_manager, config.resolver_address)
    finally:
        await rpc_manager.close()

    if endpoints_ok and resolver_ok:
        console.print("\n✨ Configuration Validated Successfully")
        return 0
    console.print("\n❌ Validation Failed")
    return 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
