from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .config import load_config
from .exceptions import ConfigError
from .registry import EventRegistry, listener_count

logger = logging.getLogger(__name__)


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )


def run_demo(registry: EventRegistry, channel: str = "myevent1") -> int:
    """Register two listeners on ``channel``, emit it once and print the count."""
    registry.on(channel, lambda: print("event triggered"))
    registry.add_listener(channel, lambda: print("Another event listener added"))
    registry.emit(channel)
    count = listener_count(registry, channel)
    print(count)
    return count


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="event-registry",
        description="Register listeners on a channel, emit it and report the listener count",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", default=None, help="YAML config file (overrides EVREG_CONFIG_FILE)")
    parser.add_argument("--channel", default="myevent1", help="Channel to register on and emit")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        logger.error("%s", exc)
        return 2

    run_demo(EventRegistry.from_config(config), channel=args.channel)
    return 0


if __name__ == "__main__":
    sys.exit(main())
