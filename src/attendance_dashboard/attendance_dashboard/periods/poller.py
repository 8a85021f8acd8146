"""Live refresh loop.

A fixed heartbeat re-evaluates the scheduler. When the decision (mode, period
or cadence zone) changes, the pending timer is dropped and a check fires
right away; otherwise a check fires whenever the current cadence elapses.
Only one check runs at a time; a tick that arrives meanwhile is held until
it finishes. A result is only shown if no newer check has already completed.
"""
from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, ThreadPoolExecutor
from datetime import datetime, timedelta
from typing import Callable, Optional

from ..attendance.model import AttendanceResult
from ..common.datetime_utils import now_local
from ..core.constants import HEARTBEAT_SECONDS
from ..core.enums import ScheduleMode
from ..core.exceptions import DomainError
from .model import ClassPeriod
from .scheduler import PeriodScheduler, ScheduleDecision

logger = logging.getLogger(__name__)

CheckFn = Callable[[ClassPeriod], AttendanceResult]
ResultFn = Callable[[ClassPeriod, AttendanceResult], None]


class LivePoller:
    def __init__(
        self,
        scheduler: PeriodScheduler,
        check: CheckFn,
        *,
        on_result: Optional[ResultFn] = None,
        clock: Callable[[], datetime] = now_local,
        executor: Optional[Executor] = None,
        heartbeat_seconds: int = HEARTBEAT_SECONDS,
    ):
        self._scheduler = scheduler
        self._check = check
        self._on_result = on_result
        self._clock = clock
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="live-check")
        self._heartbeat_seconds = heartbeat_seconds

        self._lock = threading.Lock()
        self._decision: Optional[ScheduleDecision] = None
        self._next_due: Optional[datetime] = None
        self._in_flight = False
        self._recheck_owed = False
        self._issued = 0
        self._applied = 0
        self._latest: Optional[AttendanceResult] = None

        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def decision(self) -> Optional[ScheduleDecision]:
        return self._decision

    @property
    def next_due(self) -> Optional[datetime]:
        return self._next_due

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def latest(self) -> Optional[AttendanceResult]:
        return self._latest

    @staticmethod
    def _same_schedule(a: Optional[ScheduleDecision], b: ScheduleDecision) -> bool:
        return a is not None and (a.mode, a.period, a.zone) == (b.mode, b.period, b.zone)

    def heartbeat(self, now: Optional[datetime] = None) -> bool:
        """Re-evaluate the schedule; returns True when a check was dispatched."""
        now = now or self._clock()
        decision = self._scheduler.evaluate(now)

        with self._lock:
            previous = self._decision
            self._decision = decision
            if not self._same_schedule(previous, decision):
                if previous is not None:
                    logger.info(
                        "Schedule changed %s/%s -> %s/%s, refresh every %ss",
                        previous.mode.value, previous.zone.value, decision.mode.value, decision.zone.value,
                        decision.cadence_seconds,
                    )
                self._next_due = now + timedelta(seconds=decision.cadence_seconds)
                due = True
            elif self._next_due is not None and now >= self._next_due:
                self._next_due = now + timedelta(seconds=decision.cadence_seconds)
                due = True
            else:
                # A tick refused while a check ran is fired once that check is done
                due = self._recheck_owed

            if decision.period is None:
                self._recheck_owed = False

        if not due or decision.period is None:
            return False
        return self._dispatch(decision.period)

    def _dispatch(self, period: ClassPeriod) -> bool:
        with self._lock:
            if self._in_flight:
                logger.debug("Previous check still running, deferring tick for %s", period.label)
                self._recheck_owed = True
                return False
            self._in_flight = True
            self._recheck_owed = False
            self._issued += 1
            seq = self._issued

        self._executor.submit(self._run_check, seq, period)
        return True

    def _run_check(self, seq: int, period: ClassPeriod) -> None:
        result: Optional[AttendanceResult] = None
        try:
            result = self._check(period)
        except DomainError as e:
            logger.warning("Attendance check for %s failed: %s", period.label, e)
        except Exception:
            logger.exception("Unexpected error checking attendance for %s", period.label)
        finally:
            with self._lock:
                self._in_flight = False

        if result is not None:
            self.apply_result(seq, period, result)

    def apply_result(self, seq: int, period: ClassPeriod, result: AttendanceResult) -> bool:
        """Show ``result`` unless a newer check already completed."""
        with self._lock:
            if seq <= self._applied:
                logger.debug("Discarding stale result #%d (already showing #%d)", seq, self._applied)
                return False
            self._applied = seq
            self._latest = result

        if self._on_result is not None:
            self._on_result(period, result)
        return True

    def seconds_until_wake(self, now: datetime) -> float:
        decision = self._decision
        if decision is None or self._next_due is None:
            return 0.0
        # Between classes only the one-minute detection poll runs
        limit = decision.cadence_seconds if decision.mode == ScheduleMode.IDLE else self._heartbeat_seconds
        return max(0.0, min(float(limit), (self._next_due - now).total_seconds()))

    def run(self) -> None:
        while not self._stop.is_set():
            self.heartbeat()
            self._stop.wait(self.seconds_until_wake(self._clock()))

    def start(self) -> None:
        if self._thread is not None:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self.run, name="live-poller", daemon=True)
        self._thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        self._executor.shutdown(wait=False)
