"""
Offchain gateway pipeline: batch probe first, single lookup otherwise
"""
from core.batch_gateway import BatchGatewayDispatcher
from core.network.chain_reader import BaseChainReader
from core.resolver import OffchainResolver


class OffchainGateway:
    """Entry point for a decoded CCIP-Read payload"""

    def __init__(self, chain_reader: BaseChainReader):
        self.resolver = OffchainResolver(chain_reader)
        self.batch_dispatcher = BatchGatewayDispatcher(self.resolver)

    async def handle(self, payload: bytes) -> bytes:
        """
        Answer a request payload with the bytes the caller's callback expects

        Raises:
            GatewayError subclasses for single requests; batch items never raise
        """
        batch_result = await self.batch_dispatcher.try_dispatch(payload)
        if batch_result is not None:
            return batch_result
        return await self.resolver.resolve(payload)
