"""Progress reporting for documentation builds.

Builds are reported as activities (``Rendering topics``) made of steps (one
per page). Everything goes to the ``pagesmith`` logger: activities at ``INFO``
and steps at ``DEBUG`` so ``--verbose`` shows per-page progress. Warnings and
errors are counted so the driver can summarise a run.
"""

from __future__ import annotations

import contextlib
import logging
import time
import typing as typ

from ._constants import GENERATOR_NAME

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class ActivityReporter:
    """Report build activities and their steps to a logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger(GENERATOR_NAME)
        self.warning_count = 0
        self.error_count = 0

    @contextlib.contextmanager
    def begin_activity(self, activity: str) -> cabc.Iterator[None]:
        """Log the start and duration of a build activity."""
        self.logger.info("%s...", activity)
        started = time.perf_counter()
        try:
            yield
        finally:
            self.logger.info(
                "%s finished in %.2fs", activity, time.perf_counter() - started
            )

    @contextlib.contextmanager
    def begin_step(self, step: str) -> cabc.Iterator[None]:
        """Log one step of the current activity."""
        self.logger.debug("  %s", step)
        started = time.perf_counter()
        try:
            yield
        except Exception:
            self.logger.debug("  %s failed", step)
            raise
        self.logger.debug("  %s done in %.3fs", step, time.perf_counter() - started)

    def warning(self, message: str, *args: object) -> None:
        self.warning_count += 1
        self.logger.warning(message, *args)

    def error(self, message: str, *args: object) -> None:
        self.error_count += 1
        self.logger.error(message, *args)


__all__ = ["ActivityReporter"]
