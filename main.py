"""Entry point for the Fuseki command line interface.

Three modes are supported:

``parse``   - replay an SGF record and print the final stones as JSON.
``show``    - replay an SGF record and print the final board as text.
``status``  - parse a saved Dragon Go Server status feed and print its games.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

import yaml

from core.show_board import board_to_string
from input.sgf_to_input import load_game_data
from input.status_feed import load_status
from monitoring.logging import setup_logging


def _load_config(path: str | None) -> Dict[str, Any]:
    """Load optional YAML/JSON configuration file."""

    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as fh:
            if path.endswith(".json"):
                return json.load(fh)
            return yaml.safe_load(fh) or {}
    except FileNotFoundError:
        logging.warning("Config file %s not found", path)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        logging.warning("Failed to load config %s: %s", path, exc)
    return {}


def _run_parse(sgf_path: str) -> str:
    """Return the final stones of ``sgf_path`` as JSON."""
    game = load_game_data(sgf_path)
    logging.info(
        "Parsed %s: %d white, %d black stones", sgf_path, len(game.white_stones), len(game.black_stones)
    )
    return json.dumps(game.to_dict(), indent=2)


def _run_show(sgf_path: str) -> str:
    return board_to_string(load_game_data(sgf_path))


def _run_status(feed_path: str) -> str:
    records = load_status(feed_path)
    logging.info("Found %d games in %s", len(records), feed_path)
    return json.dumps([r.to_dict() for r in records], indent=2)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``fuseki`` command line tool."""
    parser = argparse.ArgumentParser(description="Fuseki")
    parser.add_argument("--mode", choices=["parse", "show", "status"], required=True)
    parser.add_argument("--data", required=True, help="SGF file or saved status feed")
    parser.add_argument("--config", help="Optional configuration YAML/JSON")
    parser.add_argument("--log-level", help="Logging level, overrides the config file")

    args = parser.parse_args(argv)

    try:
        setup_logging(args.log_level)
        config = _load_config(args.config)
        logging.debug("Loaded config: %s", config)
        if not args.log_level and config.get("log_level"):
            setup_logging(config["log_level"])
    except ValueError as exc:
        parser.error(str(exc))

    try:
        if args.mode == "parse":
            output = _run_parse(args.data)
        elif args.mode == "show":
            output = _run_show(args.data)
        else:
            output = _run_status(args.data)
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        return 1
    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
