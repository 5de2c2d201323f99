"""
HTTP surface of the offchain gateway.

Routes:
    POST /                   CCIP-Read request, {"data": "0x..."} or raw hex
    POST /agent-delegations  same as /

Every response is JSON: {"data": "0x..."} on success, {"error": "..."} otherwise.
"""
from typing import Awaitable, Callable

from aiohttp import web

from config.settings import ACCESS_LOG_FORMAT, DEFAULT_HOST, DEFAULT_PORT, GATEWAY_PATHS
from core.envelope import decode_payload, parse_request_data
from core.errors import GatewayError, MissingPayloadError
from core.gateway import OffchainGateway
from utils.logger import get_access_logger, get_logger

logger = get_logger(__name__)

GATEWAY_KEY = web.AppKey("gateway", OffchainGateway)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def error_response(message: str, status: int) -> web.Response:
    return web.json_response({"error": message}, status=status)


@web.middleware
async def json_errors_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Render aiohttp HTTP errors (routing, oversized bodies, ...) as JSON error bodies"""
    try:
        return await handler(request)
    except web.HTTPNotFound:
        return error_response("Not found", 404)
    except web.HTTPMethodNotAllowed:
        return error_response("Method not allowed", 405)
    except web.HTTPException as e:
        if e.status < 400:
            raise
        logger.warning(f"Rejected request: {e.status} {e.reason}")
        return error_response(e.reason, e.status)


async def handle_lookup(request: web.Request) -> web.Response:
    """Decode the request payload, resolve it and wrap the answer"""
    body = (await request.read()).decode("utf-8", errors="replace")
    logger.info(f"Received offchain request: {body or '<empty>'}")

    gateway = request.app[GATEWAY_KEY]
    try:
        hex_data = parse_request_data(body)
        if hex_data is None:
            raise MissingPayloadError()
        result = await gateway.handle(decode_payload(hex_data))
    except GatewayError as e:
        if e.status_code >= 500:
            logger.exception(f"Gateway error: {e}")
        else:
            logger.warning(f"Rejected request: {e}")
        return error_response(e.public_message, e.status_code)
    except Exception as e:
        logger.exception(f"Gateway error: {e}")
        return error_response(GatewayError.public_message, 500)

    return web.json_response({"data": "0x" + result.hex()})


def create_app(gateway: OffchainGateway) -> web.Application:
    """Build the aiohttp application serving gateway"""
    app = web.Application(middlewares=[json_errors_middleware])
    app[GATEWAY_KEY] = gateway
    for path in GATEWAY_PATHS:
        app.router.add_post(path, handle_lookup)
    return app


class GatewayServer:
    """Runs the gateway application on a TCP socket"""

    def __init__(
        self,
        gateway: OffchainGateway,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        access_log: bool = False,
    ):
        self.gateway = gateway
        self.host = host
        self.port = port
        self.access_log = access_log
        self._runner: web.AppRunner | None = None
        self._site: web.TCPSite | None = None

    @property
    def is_running(self) -> bool:
        return self._site is not None

    async def start(self):
        """Start listening; calling it on a running server does nothing"""
        if self.is_running:
            return

        self._runner = web.AppRunner(
            create_app(self.gateway),
            access_log=get_access_logger() if self.access_log else None,
            access_log_format=ACCESS_LOG_FORMAT,
        )
        await self._runner.setup()
        self._site = web.TCPSite(self._runner, self.host, self.port)
        await self._site.start()

        logger.info(
            f"Agent delegations offchain resolver listening on http://{self.host}:{self.port}"
        )

    async def stop(self):
        """Stop listening and release the runner"""
        if self._site is not None:
            await self._site.stop()
            self._site = None
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
