"""Run a single collection cycle and print the measurement as JSON."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

import yaml

from .collector import HomewizardCollector
from .exceptions import HomewizardDiscoveryError
from .models import Config
from .settings import Settings

_LOGGER = logging.getLogger(__name__)


def load_config(path: str) -> Config:
    """Read the per-cycle config from a YAML file."""
    with open(path, encoding="utf-8") as config_file:
        return Config.from_dict(yaml.safe_load(config_file))


def main(argv: list[str] | None = None) -> int:
    """Run one collection cycle, returning the process exit code."""
    settings = Settings()

    parser = argparse.ArgumentParser(prog="homewizard", description=__doc__)
    parser.add_argument("--config", default="config.yaml", help="YAML file with location and names")
    parser.add_argument(
        "--timeout",
        type=int,
        default=settings.TIMEOUT_SECONDS,
        help="seconds to browse for devices",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )

    try:
        config = load_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as err:
        _LOGGER.error("Invalid config %s: %s", args.config, err)
        return 1

    collector = HomewizardCollector(
        timeout_seconds=args.timeout,
        request_timeout=settings.REQUEST_TIMEOUT_SECONDS,
    )
    try:
        result = asyncio.run(collector.collect(config))
    except HomewizardDiscoveryError as err:
        _LOGGER.error("Discovery failed: %s", err)
        return 1

    json.dump(result.measurement.to_dict(), sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
