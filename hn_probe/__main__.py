#!/usr/bin/env python3
"""
Command-line interface for HN Probe.
"""

import sys

import fire  # type: ignore
from pydantic import ValidationError

from hn_probe.checks import GROUPS
from hn_probe.config import load_config
from hn_probe.context import HNContextProvider
from hn_probe.hn import HackerNewsAPI
from hn_probe.logger import setup_logging
from hn_probe.models import Comment, Story


def run(group: str = "all", config_path: str = "") -> None:
    """
    Run checks against the live Hacker News API.

    Args:
        group: "core", "edge" or "all"
        config_path: Path to the TOML configuration file
    """
    groups = GROUPS if group == "all" else (group,)
    config = load_config(config_path)
    setup_logging(config["logging"]["level"], config["logging"]["file"])

    runner = HNContextProvider.get_runner(config)
    try:
        events = runner.run(groups)
    finally:
        runner.context.close()

    for event in events:
        line = f"  {event.outcome.value:<8} [{event.group}] {event.name}"
        if event.message:
            line += f": {event.message}"
        print(line)

    failed = [e for e in events if not e.passed]
    print(f"{len(events)} checks, {len(failed)} failed")
    if failed:
        sys.exit(1)


def item(item_id: int, config_path: str = "") -> None:
    """
    Fetch one item and print it as a story or comment.

    Args:
        item_id: The ID of the Hacker News item
        config_path: Path to the TOML configuration file
    """
    config = load_config(config_path)
    setup_logging(config["logging"]["level"], config["logging"]["file"])

    context = HNContextProvider.get_context_from_config(config)
    try:
        api = HackerNewsAPI(context)
        raw = api.get_item(item_id)
        if not isinstance(raw, dict):
            print("not found")
        else:
            model = Comment if raw.get("type") == "comment" else Story
            try:
                print(model.model_validate(raw))
            except ValidationError as e:
                print(f"item {item_id} could not be read as a {model.__name__}: {e}")
    finally:
        context.close()


def main() -> None:
    fire.Fire({"run": run, "item": item})


if __name__ == "__main__":
    main()
