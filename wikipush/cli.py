#!/usr/bin/env python3
"""
wikipush command line entry point.

Usage:
    wikipush                               # Count the files that would be uploaded
    wikipush -run -url https://wiki.example.com/w/api.php
    wikipush -run -url ... -ext .wiki -pause 1s -summary "Import from archive"
"""

import logging
import sys
from typing import Optional

from wikipush.config import Config, build_parser
from wikipush.errors import SetupError, WikiAPIError
from wikipush.logging_config import setup_logging
from wikipush.pusher import run


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO

    # Console only until we know files will actually be touched
    logger = setup_logging(name="wikipush", level=level)

    try:
        config = Config.from_args(args)

        if config.run and config.log_dir is not None:
            logger = setup_logging(name="wikipush", log_dir=str(config.log_dir), level=level)

        run(config)
    except SetupError as e:
        logger.critical(f"Error: {e}")
        return 1
    except WikiAPIError as e:
        logger.critical(f"Error logging in (wrong username/password?): {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
