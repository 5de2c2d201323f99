"""
Batch gateway dispatcher.

Handles query((address sender, string[] urls, bytes data)[]) calls sent by
aggregating resolvers: every embedded request is resolved concurrently and
the answers are returned as (bool[] failures, bytes[] responses), indexed
like the queries.
"""
import asyncio
from typing import Optional

from core.abi import BatchQuery, decode_batch_call, encode_batch_result, encode_error
from core.resolver import OffchainResolver
from utils.logger import get_logger

logger = get_logger(__name__)


class BatchGatewayDispatcher:
    """Fans batch queries out to the single-request resolver"""

    def __init__(self, resolver: OffchainResolver):
        self.resolver = resolver

    async def try_dispatch(self, payload: bytes) -> Optional[bytes]:
        """
        Resolve payload as a batch call.

        Returns:
            The encoded batch result, or None if payload is not a batch call
        """
        queries = decode_batch_call(payload)
        if queries is None:
            return None
        return await self.dispatch(queries)

    async def dispatch(self, queries: list[BatchQuery]) -> bytes:
        """Resolve every query and encode the aggregate result"""
        failures: list[bool] = [False] * len(queries)
        responses: list[bytes] = [b""] * len(queries)

        async def resolve_item(index: int, query: BatchQuery):
            try:
                responses[index] = await self.resolver.resolve(query.data)
            except Exception as e:
                logger.debug(f"Batch item {index} failed: {e}")
                failures[index] = True
                responses[index] = encode_error(e)

        await asyncio.gather(*[resolve_item(i, q) for i, q in enumerate(queries)])

        logger.debug(f"Batch of {len(queries)} resolved, {sum(failures)} failed")
        return encode_batch_result(failures, responses)
