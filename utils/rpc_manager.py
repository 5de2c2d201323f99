"""
RPC Endpoint Manager with automatic failover
"""
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Sequence, TypeVar

import aiohttp
from web3 import AsyncWeb3, AsyncHTTPProvider
from web3.exceptions import BadFunctionCallOutput, ContractLogicError, Web3ValidationError

from config.settings import ENDPOINT_COOLDOWN_SECONDS, MAX_ENDPOINT_FAILURES, PROVIDER_TIMEOUT
from utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

# Deterministic call failures: another endpoint would answer the same way
CALL_ERRORS = (BadFunctionCallOutput, Web3ValidationError)


class AllEndpointsFailedError(Exception):
    """Raised when every configured endpoint failed at the transport level"""

    def __init__(self, message: str, last_error: BaseException | None = None):
        self.last_error = last_error
        super().__init__(message)


@dataclass
class RPCEndpointHealth:
    """Track health of an RPC endpoint"""
    url: str
    failures: int = 0
    last_failure: float = 0
    last_success: float = 0
    avg_latency_ms: float = 0

    def record_success(self, latency_ms: float):
        self.last_success = time.time()
        self.failures = 0
        # Exponential moving average
        if self.avg_latency_ms == 0:
            self.avg_latency_ms = latency_ms
        else:
            self.avg_latency_ms = 0.8 * self.avg_latency_ms + 0.2 * latency_ms

    def record_failure(self):
        self.failures += 1
        self.last_failure = time.time()

    def is_healthy(self) -> bool:
        if (
            self.failures >= MAX_ENDPOINT_FAILURES
            and time.time() - self.last_failure < ENDPOINT_COOLDOWN_SECONDS
        ):
            return False
        return True


class RPCManager:
    """
    Manages AsyncWeb3 connections to the configured endpoints.

    Contract reverts are returned to the caller untouched; any other error is
    treated as a transport failure and the call moves on to the next endpoint.
    """

    def __init__(self, rpc_urls: Sequence[str], timeout: float = PROVIDER_TIMEOUT):
        if not rpc_urls:
            raise ValueError("At least one RPC endpoint is required")
        self.rpc_urls = list(rpc_urls)
        self.timeout = timeout
        self._web3_instances: dict[str, AsyncWeb3] = {}
        self._endpoint_health: dict[str, RPCEndpointHealth] = {
            url: RPCEndpointHealth(url=url) for url in self.rpc_urls
        }

    def _get_web3(self, url: str) -> AsyncWeb3:
        """Get or create a Web3 instance for a specific endpoint"""
        if url not in self._web3_instances:
            provider = AsyncHTTPProvider(
                url,
                request_kwargs={"timeout": aiohttp.ClientTimeout(total=self.timeout)},
            )
            self._web3_instances[url] = AsyncWeb3(provider)
        return self._web3_instances[url]

    def _ordered_endpoints(self) -> list[str]:
        """Healthy endpoints by latency first, then the unhealthy ones"""
        healthy = []
        unhealthy = []
        for url in self.rpc_urls:
            health = self._endpoint_health[url]
            if health.is_healthy():
                healthy.append((url, health.avg_latency_ms or float("inf")))
            else:
                unhealthy.append(url)

        # Sort by latency, stable for untried endpoints
        healthy.sort(key=lambda x: x[1])
        return [url for url, _ in healthy] + unhealthy

    def get_health(self, url: str) -> RPCEndpointHealth:
        return self._endpoint_health[url]

    async def call(self, operation: Callable[[AsyncWeb3], Awaitable[T]]) -> T:
        """
        Run operation against the best endpoint, failing over on transport errors

        Raises:
            ContractLogicError: the call reverted
            BadFunctionCallOutput, Web3ValidationError: the call itself is invalid
            AllEndpointsFailedError: no endpoint could serve the call
        """
        last_error: BaseException | None = None

        for url in self._ordered_endpoints():
            web3 = self._get_web3(url)
            health = self._endpoint_health[url]

            start_time = time.time()
            try:
                result = await operation(web3)
            except ContractLogicError:
                # The endpoint answered; the contract reverted
                health.record_success((time.time() - start_time) * 1000)
                raise
            except CALL_ERRORS:
                raise
            except Exception as e:
                health.record_failure()
                last_error = e
                logger.warning(f"RPC endpoint {url} failed: {e}")
                continue

            health.record_success((time.time() - start_time) * 1000)
            return result

        raise AllEndpointsFailedError(
            f"All RPC endpoints failed: {last_error}", last_error
        ) from last_error

    async def get_chain_id(self, url: str) -> int:
        """Chain id reported by a specific endpoint"""
        return await self._get_web3(url).eth.chain_id

    async def close(self):
        """Close all Web3 providers"""
        for url, w3 in self._web3_instances.items():
            disconnect = getattr(w3.provider, "disconnect", None)
            if disconnect is None:
                continue
            try:
                await disconnect()
            except Exception as e:
                logger.debug(f"Failed to disconnect provider {url}: {e}")
        self._web3_instances.clear()
