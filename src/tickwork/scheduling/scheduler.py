"""Virtual-time scheduler for deterministic tests of concurrent code.

Usage:
    scheduler = VirtualScheduler()
    scheduler.submit(lambda: print("a"))
    cancel = scheduler.schedule_after(timedelta(seconds=10), lambda: print("b"))

    # Nothing runs until the scheduler is driven
    scheduler.step_one()          # runs "a"
    scheduler.advance_by(10)      # clock += 10s, runs "b" unless cancelled

    assert scheduler.state.is_quiescent
    assert scheduler.state.last_failure is None

    # Replay a specific interleaving of same-instant tasks
    scheduler = VirtualScheduler(config=SchedulerConfig(seed=1234))
"""

from __future__ import annotations

import logging
import random
import threading
from datetime import timedelta

from tickwork.core.task import Task, extract_one
from tickwork.core.types import ZERO, Action, Cancel, DurationLike, as_duration
from tickwork.scheduling.models import EngineState, InvariantViolationError, SchedulerConfig

logger = logging.getLogger(__name__)


class VirtualScheduler:
    """Task scheduler driven by explicit calls instead of threads and wall-clock time.

    Work is only executed synchronously inside step_one, advance_by and
    advance_until_quiescent. Among tasks due at the same instant, the next one
    is picked at random to simulate real-world interleaving; tasks due at
    different instants always run in time order.

    All operations are guarded by a reentrant lock, so tasks may submit or
    schedule more work from inside their action, and other threads may submit
    concurrently.

    Args:
        config: Scheduler configuration (tie-break pool, seed, epoch).
    """

    def __init__(self, config: SchedulerConfig | None = None) -> None:
        self._config = config or SchedulerConfig()
        self._random = random.Random(self._config.seed)
        self._lock = threading.RLock()
        self._state = EngineState.initial(self._config.epoch)

    @property
    def config(self) -> SchedulerConfig:
        return self._config

    @property
    def state(self) -> EngineState:
        """Current immutable snapshot, for assertions."""
        with self._lock:
            return self._state

    def now(self) -> timedelta:
        """Current virtual time."""
        with self._lock:
            return self._state.clock

    def submit(self, action: Action) -> None:
        """Enqueue action to run at the current virtual time."""
        _check_callable(action)
        with self._lock:
            task, self._state = self._state.with_task(action, ZERO)
        logger.debug("Submitted task %d at %s", task.id, task.runs_at)

    def schedule_after(self, delay: DurationLike, action: Action) -> Cancel:
        """Enqueue action to run once the clock reaches now + delay.

        Negative delays are treated as zero.

        Args:
            delay: timedelta or seconds.
            action: Zero-argument callable.

        Returns:
            Handle that removes the task if it is still pending. Calling it
            after the task ran, or more than once, does nothing.
        """
        _check_callable(action)
        duration = as_duration(delay)
        with self._lock:
            task, self._state = self._state.with_task(action, duration)
        logger.debug("Scheduled task %d at %s", task.id, task.runs_at)

        def cancel() -> None:
            self._cancel(task)

        return cancel

    def report_failure(self, error: BaseException) -> None:
        """Record error as the last failure, replacing any previous one."""
        with self._lock:
            self._state = self._state.with_failure(error)

    def step_one(self) -> bool:
        """Run one task eligible at the current clock, without moving the clock.

        Returns:
            True if a task was found and executed (even if it raised),
            False if nothing was eligible.
        """
        with self._lock:
            current = self._state
            extracted = extract_one(
                current.pending, current.clock, self._random, self._config.tie_break_pool_size
            )
            if extracted is None:
                return False
            task, remaining = extracted
            self._state = EngineState(
                last_id=current.last_id,
                clock=current.clock,
                pending=remaining,
                last_failure=current.last_failure,
            )
            self._run(task)
            return True

    def advance_by(self, duration: DurationLike = ZERO) -> None:
        """Move the clock forward by duration, running every task due on the way.

        Tasks run in runs_at order, with the clock set to each task's runs_at
        while it executes. Tasks enqueued by running tasks are picked up if
        they fall due before the target. The clock ends exactly at the target,
        unless a task advanced it further itself; it never moves backwards.

        Args:
            duration: timedelta or seconds. Defaults to zero.

        Raises:
            ValueError: If duration is negative.
        """
        step = as_duration(duration)
        if step < ZERO:
            raise ValueError("duration must be >= 0")

        with self._lock:
            target = self._state.clock + step

        executed = 0
        while True:
            with self._lock:
                current = self._state
                extracted = extract_one(
                    current.pending, target, self._random, self._config.tie_break_pool_size
                )
                if extracted is None:
                    # A nested advance from inside a task may already be past target
                    self._state = EngineState(
                        last_id=current.last_id,
                        clock=max(target, current.clock),
                        pending=current.pending,
                        last_failure=current.last_failure,
                    )
                    break
                task, remaining = extracted
                self._state = EngineState(
                    last_id=current.last_id,
                    clock=task.runs_at,
                    pending=remaining,
                    last_failure=current.last_failure,
                )
                self._run(task)
                executed += 1

        logger.debug("Advanced clock to %s, executed %d task(s)", target, executed)

    def advance_until_quiescent(self, duration: DurationLike = ZERO) -> None:
        """Repeat advance_by(duration) until no tasks remain pending.

        Does not return if tasks keep rescheduling themselves forever.
        """
        self.advance_by(duration)
        while not self.state.is_quiescent:
            self.advance_by(duration)

    def derive(self) -> DerivedScheduler:
        """Return a view of this scheduler exposing only submit and report_failure."""
        return DerivedScheduler(self)

    def _cancel(self, task: Task) -> None:
        with self._lock:
            updated = self._state.without_task(task)
            if updated is self._state:
                return
            self._state = updated
        logger.debug("Cancelled task %d", task.id)

    def _run(self, task: Task) -> None:
        """Execute task's action, capturing any exception as the last failure.

        Invariant violations are engine bugs, not task errors, and always propagate.
        """
        try:
            task.action()
        except InvariantViolationError:
            raise
        except Exception as e:
            logger.debug("Task %d raised, recorded as last failure", task.id, exc_info=True)
            self.report_failure(e)


class DerivedScheduler:
    """Forwards submit and report_failure to a VirtualScheduler.

    Holds no state; handed to callers that must not drive the clock.
    """

    __slots__ = ("_parent",)

    def __init__(self, parent: VirtualScheduler) -> None:
        self._parent = parent

    def submit(self, action: Action) -> None:
        self._parent.submit(action)

    def report_failure(self, error: BaseException) -> None:
        self._parent.report_failure(error)


def _check_callable(action: object) -> None:
    if not callable(action):
        raise TypeError(f"action must be callable, got {type(action).__name__}")
