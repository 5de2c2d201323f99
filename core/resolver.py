"""
Single-request resolver: decode a lookup, read the resolver contract,
encode the answer for the calling contract's callback
"""
from core.abi import decode_lookup_request, encode_lookup_result
from core.errors import ChainReadError
from core.lookup import LookupRequest
from core.network.chain_reader import BaseChainReader
from utils.logger import get_logger

logger = get_logger(__name__)


class OffchainResolver:
    """
    Answers one (kind, node, key) lookup.

    The kind is validated before the chain is touched, so an unsupported
    request never costs an RPC call.
    """

    def __init__(self, chain_reader: BaseChainReader):
        self.chain_reader = chain_reader

    async def lookup(self, request: LookupRequest) -> str | bytes:
        """Read the value for an already decoded request"""
        return await self.chain_reader.read_view(
            request.kind.function_name, request.node, request.key
        )

    async def resolve(self, payload: bytes) -> bytes:
        """
        Resolve an ABI-encoded lookup request.

        Returns:
            abi.encode(string) for text lookups, abi.encode(bytes) for data lookups

        Raises:
            RequestDecodeError, UnsupportedKindError, ChainReadError
        """
        request = decode_lookup_request(payload)
        value = await self.lookup(request)

        try:
            return encode_lookup_result(request.kind, value)
        except ValueError as e:
            raise ChainReadError(str(e), request.kind.function_name) from e
