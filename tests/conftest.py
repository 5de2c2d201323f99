import asyncio

import pytest

from core.errors import ChainReadError
from core.network.chain_reader import BaseChainReader

NODE = bytes.fromhex("aa" * 32)
RESOLVER_ADDRESS = "0x" + "11" * 20


class StubChainReader(BaseChainReader):
    """
    Answers read_view from a {(function_name, key): value} table.
    A value that is an exception is raised; a missing entry reverts.
    """

    def __init__(self, values=None, delays=None):
        super().__init__(RESOLVER_ADDRESS)
        self.values = values or {}
        self.delays = delays or {}
        self.calls = []
        self.completed = []

    async def read_view(self, function_name, node, key):
        self.calls.append((function_name, node, key))
        delay = self.delays.get(key)
        if delay:
            await asyncio.sleep(delay)
        self.completed.append(key)

        value = self.values.get((function_name, key))
        if isinstance(value, Exception):
            raise value
        if value is None:
            raise ChainReadError(f"{function_name}() reverted", function_name)
        return value


@pytest.fixture
def node() -> bytes:
    return NODE


@pytest.fixture
def reader() -> StubChainReader:
    return StubChainReader(
        values={
            ("text", "avatar"): "ipfs://QmAvatar",
            ("text", "url"): "https://agents.example",
            ("data", "delegations"): b"\x01\x02\x03",
        }
    )
