import argparse
import logging
from typing import List, Optional

import uvicorn

from .api.app import init_app
from .core.config import SystemConfig, SystemDefaults

logger = logging.getLogger(__name__)


def parse_port(value: Optional[str]) -> int:
    """Port from the command line; anything non-numeric means the default"""
    try:
        port = int(value)
    except (TypeError, ValueError):
        return SystemDefaults.DEFAULT_PORT
    if not 1 <= port <= 65535:
        return SystemDefaults.DEFAULT_PORT
    return port


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point with argument parsing"""
    parser = argparse.ArgumentParser(
        prog="blink1-server", description="HTTP server for blink(1) devices"
    )
    parser.add_argument("port", nargs="?", help="Port to listen on (default 8080)")
    args = parser.parse_args(argv)

    config = SystemConfig.create_default()
    config.server.port = parse_port(args.port)

    # Setup logging
    logging.basicConfig(
        level=getattr(logging, config.server.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    host = "localhost" if config.server.host == "0.0.0.0" else config.server.host
    logger.info(f"blink1-server listening at http://{host}:{config.server.port}/")

    app = init_app(config=config)
    uvicorn.run(
        app,
        host=config.server.host,
        port=config.server.port,
        log_level=config.server.log_level.lower(),
    )


if __name__ == "__main__":
    main()
