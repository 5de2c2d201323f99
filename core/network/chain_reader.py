"""
Chain read port for the agent delegations resolver contract.
Only view functions are called; nothing here sends a transaction.
"""
from abc import ABC, abstractmethod

from web3 import AsyncWeb3
from web3.exceptions import ContractLogicError

from core.abi import RESOLVER_ABI
from core.errors import ChainReadError
from utils.rpc_manager import CALL_ERRORS, AllEndpointsFailedError, RPCManager
from utils.logger import get_logger

logger = get_logger(__name__)


class BaseChainReader(ABC):
    """Abstract read access to the resolver contract"""

    def __init__(self, contract_address: str):
        self.contract_address = contract_address

    @abstractmethod
    async def read_view(
        self,
        function_name: str,
        node: bytes,
        key: str
    ) -> str | bytes:
        """
        Call a (bytes32 node, string key) view function on the resolver

        Args:
            function_name: "text" or "data"
            node: 32-byte namehash
            key: Record key

        Returns:
            The function's single return value

        Raises:
            ChainReadError: the call reverted or the transport failed
        """
        pass


class Web3ChainReader(BaseChainReader):
    """Reads the resolver through web3 eth_call, with RPC failover"""

    def __init__(self, rpc_manager: RPCManager, contract_address: str):
        super().__init__(AsyncWeb3.to_checksum_address(contract_address))
        self.rpc_manager = rpc_manager

    async def read_view(
        self,
        function_name: str,
        node: bytes,
        key: str
    ) -> str | bytes:
        async def execute_call(web3: AsyncWeb3):
            contract = web3.eth.contract(address=self.contract_address, abi=RESOLVER_ABI)
            return await contract.functions[function_name](node, key).call()

        try:
            value = await self.rpc_manager.call(execute_call)
        except ContractLogicError as e:
            raise ChainReadError(
                f"{function_name}() reverted on {self.contract_address}: {e}", function_name
            ) from e
        except CALL_ERRORS as e:
            raise ChainReadError(
                f"{function_name}() call to {self.contract_address} is invalid: {e}", function_name
            ) from e
        except AllEndpointsFailedError as e:
            raise ChainReadError(f"{function_name}() failed: {e}", function_name) from e

        logger.debug(f"{function_name}(0x{node.hex()}, {key!r}) -> {value!r}")
        return value
