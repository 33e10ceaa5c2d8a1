"""Main entry point for the streamer.

Usage:
    python -m streamer.main
    python -m streamer.main --config path/to/streamer.yaml
    python -m streamer.main --debug
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional

from streamer.config import load_config
from streamer.streamer import Streamer


logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    """Configure logging for the streamer.

    Args:
        debug: Enable DEBUG level logging.
    """
    level = logging.DEBUG if debug else logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    formatter = logging.Formatter(
        "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    # Reduce noise from libraries
    logging.getLogger("websocket").setLevel(logging.WARNING)


async def main(config_path: Optional[str] = None) -> int:
    """Main async entry point.

    Args:
        config_path: Path to configuration file.

    Returns:
        Exit code (0 for clean or cancelled exit, 1 for config error,
        2 for session failure).
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError as e:
        logger.error(f"Configuration file not found: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    logger.info("Streamer configuration:")
    logger.info(f"  Public channels: {config.public_channels}")
    logger.info(f"  Private channels: {config.private_channels}")
    logger.info(f"  Symbols: {config.symbols}")
    logger.info(f"  Testnet: {config.testnet}")
    logger.info(f"  Queue size: {config.queue_size}")

    if not config.public_channels and not config.private_channels:
        logger.error("No channels configured. Add public_channels or private_channels to streamer.yaml")
        return 1

    try:
        streamer = Streamer(config=config)
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    try:
        streamer.start()
        await streamer.run_until_shutdown()
    except Exception as e:
        logger.error(f"Streamer error: {e}")
        streamer.stop()
        return 2

    if streamer.failures:
        return 2
    return 0


def cli() -> None:
    """Command-line interface entry point."""
    parser = argparse.ArgumentParser(
        description="Streamer - print BitMEX realtime events to the console",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to configuration file (default: conf/streamer.yaml)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()
    setup_logging(debug=args.debug)

    try:
        exit_code = asyncio.run(main(args.config))
        sys.exit(exit_code)
    except KeyboardInterrupt:
        logger.info("Interrupted")
        sys.exit(130)


if __name__ == "__main__":
    cli()
