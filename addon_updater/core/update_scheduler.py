"""Run add-on updates on a cron schedule."""

from __future__ import annotations

import time
from datetime import datetime
from typing import Optional

from croniter import croniter
from croniter.croniter import CroniterBadCronError

from addon_updater.common.config import AddonSettings
from addon_updater.common.errors import AddonUpdaterError, InvalidScheduleError
from addon_updater.common.logging_config import get_logger
from addon_updater.core.addons import AddonDatabase
from addon_updater.core.catalog import CatalogClient
from addon_updater.core.updater import AddonUpdater, UpdateSummary

MAX_SLEEP_INTERVAL_SECONDS = 30
POST_UPDATE_DELAY_SECONDS = 10


class CronSchedule:
    """Cron schedule helper backed by :mod:`croniter`."""

    def __init__(self, expression: str) -> None:
        self._expression = expression
        self._validate_expression()

    @property
    def expression(self) -> str:
        return self._expression

    def _validate_expression(self) -> None:
        """Eagerly validate cron syntax so we fail fast on start-up."""

        try:
            croniter(self._expression, datetime.now())
        except (CroniterBadCronError, ValueError) as exc:
            raise InvalidScheduleError(str(exc)) from exc

    def next_run(self, reference: datetime) -> datetime:
        """Return the next scheduled time strictly after ``reference``."""

        try:
            iterator = croniter(self._expression, reference, ret_type=datetime)
            return iterator.get_next(datetime)
        except (CroniterBadCronError, ValueError) as exc:  # pragma: no cover - validated up front
            raise InvalidScheduleError(str(exc)) from exc


def run_update_pass(settings: AddonSettings) -> UpdateSummary:
    """Load the database, update every add-on and persist the result."""
    database = AddonDatabase.from_settings(settings)
    database.check_folder()
    updater = AddonUpdater(database, CatalogClient(timeout=settings.http_timeout()))
    try:
        return updater.update_all()
    finally:
        database.save()


def _wait_until(target: datetime) -> None:
    while True:
        delta = (target - datetime.now()).total_seconds()
        if delta <= 0:
            return
        time.sleep(min(delta, MAX_SLEEP_INTERVAL_SECONDS))


def run_scheduler(settings: Optional[AddonSettings] = None) -> None:
    """Wait for cron events and run a full update pass on each one."""

    settings = settings or AddonSettings()
    logger = get_logger(__name__)

    cron_expression = settings.update_cron()
    if not cron_expression:
        logger.info("Update scheduler disabled (ADDONS_UPDATE_CRON is not set)")
        return

    try:
        schedule = CronSchedule(cron_expression)
    except InvalidScheduleError as exc:
        logger.error("Invalid ADDONS_UPDATE_CRON expression '%s': %s", cron_expression, exc)
        return

    logger.info("Update scheduler active (cron='%s')", cron_expression)

    while True:
        next_run = schedule.next_run(datetime.now())
        logger.info("Next scheduled update at %s", next_run.strftime("%Y-%m-%d %H:%M"))
        _wait_until(next_run)

        try:
            summary = run_update_pass(settings)
        except AddonUpdaterError as exc:
            logger.error("Scheduled update failed: %s", exc)
        else:
            if summary.failed:
                logger.warning("Scheduled update could not update: %s", ", ".join(summary.failed))

        time.sleep(POST_UPDATE_DELAY_SECONDS)


__all__ = ["CronSchedule", "run_update_pass", "run_scheduler"]
