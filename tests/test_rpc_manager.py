import pytest
from web3.exceptions import BadFunctionCallOutput, ContractLogicError, Web3ValidationError

from utils.rpc_manager import AllEndpointsFailedError, RPCEndpointHealth, RPCManager

URLS = ["https://primary.example", "https://secondary.example"]


def endpoint(web3) -> str:
    return web3.provider.endpoint_uri


class TestRPCEndpointHealth:

    def test_unhealthy_after_repeated_failures(self):
        health = RPCEndpointHealth(url=URLS[0])
        for _ in range(3):
            health.record_failure()

        assert not health.is_healthy()

        health.record_success(10.0)
        assert health.is_healthy()
        assert health.failures == 0

    def test_latency_moving_average(self):
        health = RPCEndpointHealth(url=URLS[0])
        health.record_success(100.0)
        health.record_success(200.0)

        assert health.avg_latency_ms == pytest.approx(120.0)


class TestRPCManager:

    def test_requires_endpoint(self):
        with pytest.raises(ValueError):
            RPCManager([])

    @pytest.mark.asyncio
    async def test_call_uses_first_endpoint(self):
        manager = RPCManager(URLS)

        async def operation(web3):
            return endpoint(web3)

        assert await manager.call(operation) == URLS[0]
        assert manager.get_health(URLS[0]).last_success > 0

    @pytest.mark.asyncio
    async def test_transport_failure_fails_over(self):
        manager = RPCManager(URLS)
        seen = []

        async def operation(web3):
            seen.append(endpoint(web3))
            if endpoint(web3) == URLS[0]:
                raise ConnectionError("connection refused")
            return "ok"

        assert await manager.call(operation) == "ok"
        assert seen == URLS
        assert manager.get_health(URLS[0]).failures == 1

    @pytest.mark.asyncio
    async def test_revert_is_not_retried(self):
        manager = RPCManager(URLS)
        seen = []

        async def operation(web3):
            seen.append(endpoint(web3))
            raise ContractLogicError("execution reverted")

        with pytest.raises(ContractLogicError):
            await manager.call(operation)

        assert seen == URLS[:1]
        assert manager.get_health(URLS[0]).failures == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [BadFunctionCallOutput("Could not decode contract function call"), Web3ValidationError("bad argument")],
    )
    async def test_invalid_call_is_not_retried(self, error):
        manager = RPCManager(URLS)
        seen = []

        async def operation(web3):
            seen.append(endpoint(web3))
            raise error

        with pytest.raises(type(error)):
            await manager.call(operation)

        assert seen == URLS[:1]
        assert all(manager.get_health(url).failures == 0 for url in URLS)

    @pytest.mark.asyncio
    async def test_all_endpoints_failed(self):
        manager = RPCManager(URLS)

        async def operation(web3):
            raise TimeoutError("timed out")

        with pytest.raises(AllEndpointsFailedError) as exc_info:
            await manager.call(operation)

        assert isinstance(exc_info.value.last_error, TimeoutError)

    @pytest.mark.asyncio
    async def test_unhealthy_endpoint_tried_last(self):
        manager = RPCManager(URLS)
        for _ in range(3):
            manager.get_health(URLS[0]).record_failure()

        async def operation(web3):
            return endpoint(web3)

        assert await manager.call(operation) == URLS[1]
        await manager.close()
