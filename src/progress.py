"""Progress events and the reporters that render them."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from versioning.models import UpdateOutcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgressEvent:
    """One processed reference; ``step`` is 1-based."""
    step: int
    total: int
    url: str
    outcome: UpdateOutcome


class Reporter(Protocol):
    """Consumer of progress events."""

    def report(self, event: ProgressEvent) -> None:
        ...


def describe(outcome: UpdateOutcome) -> str:
    """Single-line, human-readable summary of an outcome."""
    if outcome.success is None:
        return f"{outcome.init_url} (unchanged)"
    if outcome.success:
        return f"{outcome.init_url} -> {outcome.message}"
    return f"{outcome.init_url} failed: {outcome.message}"


class LogReporter:
    """Report each event as an INFO record prefixed with ``[step/total]``."""

    def __init__(self, log: logging.Logger = logger):
        self._log = log

    def report(self, event: ProgressEvent) -> None:
        self._log.info("[%d/%d] %s", event.step, event.total, describe(event.outcome))


class SilentReporter:
    """Drop every event."""

    def report(self, event: ProgressEvent) -> None:
        return None
