"""
Workflow module for running check groups against the Hacker News API
and reporting one event per check.
"""

import logging
import time
from typing import Iterable, List, Optional

from hn_probe.checks import GROUPS, Check, CheckFailed, ConditionNotObserved, SuiteSettings, checks_for
from hn_probe.errors import ProbeError
from hn_probe.events import CheckEvent, EventSink, LoggingSink, Outcome
from hn_probe.hn import HackerNewsAPI, HNContext

logger = logging.getLogger(__name__)


class SuiteRunner:
    """
    Runs checks in registry order. A failing check is recorded and the
    runner moves on to the next one.
    """

    def __init__(
        self,
        context: HNContext,
        settings: Optional[SuiteSettings] = None,
        sink: Optional[EventSink] = None,
    ):
        """
        Initialize the runner with a context object.

        Args:
            context: The HN context containing all dependencies
            settings: Thresholds used by the checks
            sink: Receiver for per-check events
        """
        self.context = context
        self.settings = settings or SuiteSettings()
        self.sink = sink or LoggingSink()
        self.hn_api = HackerNewsAPI(context)

    def run_check(self, check: Check) -> CheckEvent:
        """Run a single check and emit its event."""
        started = time.monotonic()
        observed = {}
        message = ""
        try:
            observed = check(self.hn_api, self.settings)
            outcome = Outcome.PASSED
        except ConditionNotObserved as e:
            outcome = Outcome.SKIPPED
            message = e.reason
        except CheckFailed as e:
            outcome = Outcome.FAILED
            message = e.message
            observed = e.observed
        except ProbeError as e:
            outcome = Outcome.ERROR
            message = str(e)
        except Exception as e:
            logger.exception("Check %r raised unexpectedly", check.name)
            outcome = Outcome.ERROR
            message = f"{type(e).__name__}: {e}"

        event = CheckEvent(
            group=check.group,
            name=check.name,
            outcome=outcome,
            message=message,
            observed=observed or {},
            duration=time.monotonic() - started,
        )
        self.sink.emit(event)
        return event

    def run_group(self, group: str) -> List[CheckEvent]:
        logger.info("Starting %s checks", group)
        events = [self.run_check(check) for check in checks_for(group)]
        failed = sum(1 for e in events if not e.passed)
        logger.info("Completed %s checks: %d run, %d not passed", group, len(events), failed)
        return events

    def run(self, groups: Iterable[str] = GROUPS) -> List[CheckEvent]:
        events: List[CheckEvent] = []
        for group in groups:
            events.extend(self.run_group(group))
        return events
