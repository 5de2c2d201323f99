"""
Logging utilities
"""
import logging
from rich.logging import RichHandler
from rich.console import Console

from config.settings import LOG_LEVEL

# Global console for rich output
console = Console()

ACCESS_LOGGER_NAME = "aiohttp.access"


def setup_logging(level: str = LOG_LEVEL, access_log: bool = False):
    """
    Configure logging with rich handler

    Args:
        level: Root log level name
        access_log: Emit one aiohttp access line per request
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=console,
                rich_tracebacks=True,
                show_path=False,
                # Request bodies are logged verbatim; brackets are not markup
                markup=False
            )
        ],
        force=True
    )

    # Reduce noise from external libraries
    logging.getLogger("web3").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    get_access_logger().setLevel(logging.INFO if access_log else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance"""
    return logging.getLogger(name)


def get_access_logger() -> logging.Logger:
    """Logger aiohttp writes request lines to"""
    return logging.getLogger(ACCESS_LOGGER_NAME)
