from typing import Any, Dict, List

from hn_probe.checks import SuiteSettings
from hn_probe.config import load_config
from hn_probe.events import EventSink, JsonLinesSink, LoggingSink, MultiSink
from hn_probe.hn import DEFAULT_BASE_URL, HNContext, RequestsClient
from hn_probe.workflow import SuiteRunner


class HNContextProvider:
    """
    Service locator/provider for Hacker News contexts.
    Follows the patterns in "Architecture Patterns with Python".
    """

    @staticmethod
    def get_context_from_config(config: Dict[str, Any]) -> HNContext:
        """Build a context from an already loaded configuration dictionary."""
        api = config["api"]
        timeout = api.get("timeout") or None
        return HNContext(api_client=RequestsClient(timeout=timeout), base_url=api["base_url"])

    @staticmethod
    def get_default_context(config_path: str = "") -> HNContext:
        """
        Factory method to create a default context with standard configuration.

        Args:
            config_path: Path to the configuration file. If not provided,
                         the function will search for a config file in standard locations.

        Returns:
            A configured HNContext
        """
        return HNContextProvider.get_context_from_config(load_config(config_path))

    @staticmethod
    def get_context_from_params(base_url: str = DEFAULT_BASE_URL, timeout: float = 0) -> HNContext:
        """
        Alternative factory method that creates a context using parameter values directly.

        Args:
            base_url: Base URL for the Hacker News API
            timeout: Request timeout in seconds, 0 for the transport default

        Returns:
            A configured HNContext
        """
        return HNContext(api_client=RequestsClient(timeout=timeout or None), base_url=base_url)

    @staticmethod
    def get_runner(config: Dict[str, Any]) -> SuiteRunner:
        """Build a SuiteRunner, with its context and event sinks, from configuration."""
        sinks: List[EventSink] = [LoggingSink()]
        if config["events"]["path"]:
            sinks.append(JsonLinesSink(config["events"]["path"]))

        return SuiteRunner(
            context=HNContextProvider.get_context_from_config(config),
            settings=SuiteSettings(**config["suite"]),
            sink=sinks[0] if len(sinks) == 1 else MultiSink(sinks),
        )
