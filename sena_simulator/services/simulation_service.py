"""Chunked Monte Carlo simulation of random wagers against one reference draw."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import wait as wait_futures
from dataclasses import dataclass, field, replace
from threading import Event, Lock
from uuid import uuid4

from sena_simulator.errors import ConflictError, NotFoundError, SimulationCancelledError, ValidationError
from sena_simulator.models.simulation import PrizeTier, SimulationResult, SimulationState, SimulationSummary
from sena_simulator.models.wager import MAX_WAGER_SIZE, MIN_WAGER_SIZE, NUMBERS_PER_DRAW, Ticket
from sena_simulator.services.draw_service import DrawService

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 10_000
DEFAULT_MAX_ITERATIONS = 5_000_000
MAX_RETAINED_JOBS = 50


class SimulationEngine:
    """One simulation run: `iterations` random wagers of `wager_size` numbers.

    The run is split into batches of `batch_size` tickets. `iter_batches` is a
    generator that suspends after every batch and yields the completed
    percentage, so the caller decides when the next batch runs. Progress is
    floor(done * 100 / iterations): it never decreases and is 100 only once
    every ticket has been classified.

    Cancellation is checked at batch boundaries. A cancelled run produces no
    partial result; `SimulationCancelledError` is raised instead.
    """

    def __init__(
        self,
        wager_size: int,
        iterations: int,
        draw_service: DrawService | None = None,
        *,
        batch_size: int = DEFAULT_BATCH_SIZE,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
    ) -> None:
        if wager_size < MIN_WAGER_SIZE or wager_size > MAX_WAGER_SIZE:
            raise ValidationError(
                message="Invalid dozens",
                details={"dozens": [f"Must be within {MIN_WAGER_SIZE}..{MAX_WAGER_SIZE}"]},
            )
        if iterations < 1 or iterations > max_iterations:
            raise ValidationError(
                message="Invalid iterations",
                details={"iterations": [f"Must be within 1..{max_iterations}"]},
            )
        if batch_size < 1:
            raise ValueError("batch_size must be positive")

        self.wager_size = wager_size
        self.iterations = iterations
        self.batch_size = batch_size
        self._draws = draw_service or DrawService()
        self._state = SimulationState.IDLE
        self._result: SimulationResult | None = None

    @property
    def state(self) -> SimulationState:
        return self._state

    @property
    def result(self) -> SimulationResult | None:
        return self._result

    def iter_batches(self, cancel_check: Callable[[], bool] | None = None) -> Iterator[int]:
        if self._state is not SimulationState.IDLE:
            raise ConflictError(message=f"Simulation already {self._state.value.lower()}")
        self._state = SimulationState.RUNNING

        buckets: dict[PrizeTier, list[Ticket]] = {tier: [] for tier in PrizeTier}

        done = 0
        try:
            reference = self._draws.draw_distinct_numbers(NUMBERS_PER_DRAW)
            while done < self.iterations:
                if cancel_check is not None and cancel_check():
                    raise SimulationCancelledError(
                        details={"completed": done, "iterations": self.iterations},
                    )

                batch_end = min(done + self.batch_size, self.iterations)
                for _ in range(done, batch_end):
                    ticket = self._draws.draw_distinct_numbers(self.wager_size)
                    members = set(ticket)
                    matches = sum(1 for n in reference if n in members)
                    tier = PrizeTier.from_matches(matches)
                    if tier is not None:
                        buckets[tier].append(ticket)
                done = batch_end

                yield done * 100 // self.iterations
        except (GeneratorExit, SimulationCancelledError):
            # GeneratorExit: the consumer abandoned the run between batches.
            self._state = SimulationState.CANCELLED
            raise
        except Exception:
            self._state = SimulationState.FAILED
            raise

        self._result = SimulationResult(
            reference_draw=reference,
            wager_size=self.wager_size,
            iterations=self.iterations,
            sena_tickets=tuple(buckets[PrizeTier.SENA]),
            quina_tickets=tuple(buckets[PrizeTier.QUINA]),
            quadra_tickets=tuple(buckets[PrizeTier.QUADRA]),
        )
        self._state = SimulationState.COMPLETED

    def run(
        self,
        progress_cb: Callable[[int], None] | None = None,
        cancel_check: Callable[[], bool] | None = None,
    ) -> SimulationResult:
        """Drive every batch to completion, publishing progress after each one."""

        for percent in self.iter_batches(cancel_check):
            if progress_cb is not None:
                progress_cb(percent)

        if self._result is None:  # pragma: no cover
            raise RuntimeError("Simulation finished without a result")
        return self._result


@dataclass(frozen=True)
class SimulationJob:
    """Snapshot of one job.

    `summary` survives for every completed job. `result`, which carries the
    winning ticket lists, is kept only for the newest completed job and is
    dropped once a later run supersedes it.
    """

    job_id: str
    wager_size: int
    iterations: int
    state: SimulationState
    progress: int
    summary: SimulationSummary | None = None
    result: SimulationResult | None = None
    error: str | None = None


@dataclass
class _JobRecord:
    job: SimulationJob
    engine: SimulationEngine | None
    cancel_event: Event = field(default_factory=Event)
    future: Future | None = None


class SimulationJobManager:
    """Run simulations on worker threads and expose their progress by job id.

    Progress and results are handed over through lock-guarded job records;
    callers only ever see immutable `SimulationJob` snapshots.
    """

    def __init__(
        self,
        draw_service: DrawService | None = None,
        *,
        batch_size: int = DEFAULT_BATCH_SIZE,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        max_workers: int = 2,
    ) -> None:
        self._draws = draw_service or DrawService()
        self._batch_size = batch_size
        self._max_iterations = max_iterations
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="simulation")
        self._lock = Lock()
        self._jobs: dict[str, _JobRecord] = {}
        self._latest_job_id: str | None = None

    def submit(self, wager_size: int, iterations: int) -> SimulationJob:
        engine = SimulationEngine(
            wager_size,
            iterations,
            self._draws.spawn(),
            batch_size=self._batch_size,
            max_iterations=self._max_iterations,
        )
        job = SimulationJob(
            job_id=uuid4().hex,
            wager_size=wager_size,
            iterations=iterations,
            state=SimulationState.IDLE,
            progress=0,
        )
        record = _JobRecord(job=job, engine=engine)

        with self._lock:
            self._evict_finished()
            self._jobs[job.job_id] = record

        record.future = self._executor.submit(self._run, record)
        logger.info("Simulation %s queued (dozens=%s, iterations=%s)", job.job_id, wager_size, iterations)
        return job

    def get(self, job_id: str) -> SimulationJob:
        with self._lock:
            return self._record(job_id).job

    def cancel(self, job_id: str) -> SimulationJob:
        with self._lock:
            record = self._record(job_id)
            record.cancel_event.set()
            return record.job

    def wait(self, job_id: str, timeout: float | None = None) -> SimulationJob:
        """Block until the job leaves the queue/running states or `timeout` expires."""

        with self._lock:
            future = self._record(job_id).future
        if future is not None:
            wait_futures([future], timeout=timeout)
        return self.get(job_id)

    def latest(self) -> SimulationJob:
        """Newest completed job, the only one still holding its ticket lists."""

        with self._lock:
            if self._latest_job_id is None:
                raise NotFoundError(message="No simulation has completed yet")
            return self._record(self._latest_job_id).job

    def active_count(self) -> int:
        with self._lock:
            return sum(
                1
                for record in self._jobs.values()
                if record.job.state in (SimulationState.IDLE, SimulationState.RUNNING)
            )

    def shutdown(self, wait: bool = True) -> None:
        with self._lock:
            for record in self._jobs.values():
                record.cancel_event.set()
        self._executor.shutdown(wait=wait)

    def _record(self, job_id: str) -> _JobRecord:
        record = self._jobs.get(job_id)
        if record is None:
            raise NotFoundError(message=f"Simulation {job_id} not found")
        return record

    def _update(self, record: _JobRecord, **changes: object) -> None:
        with self._lock:
            record.job = replace(record.job, **changes)

    def _evict_finished(self) -> None:
        finished = [
            job_id
            for job_id, record in self._jobs.items()
            if record.job.state not in (SimulationState.IDLE, SimulationState.RUNNING)
            and job_id != self._latest_job_id
        ]
        overflow = len(self._jobs) - MAX_RETAINED_JOBS + 1
        for job_id in finished[: max(0, overflow)]:
            del self._jobs[job_id]

    def _run(self, record: _JobRecord) -> None:
        job_id = record.job.job_id
        engine = record.engine
        self._update(record, state=SimulationState.RUNNING)

        def _publish(percent: int) -> None:
            self._update(record, progress=percent)

        try:
            result = engine.run(progress_cb=_publish, cancel_check=record.cancel_event.is_set)
        except SimulationCancelledError as exc:
            logger.info("Simulation %s cancelled (%s)", job_id, exc.details)
            self._update(record, state=SimulationState.CANCELLED, error=exc.code)
            return
        except Exception:
            logger.exception("Simulation %s failed", job_id)
            self._update(record, state=SimulationState.FAILED, error="internal_error")
            return
        finally:
            # The engine holds a second reference to the ticket lists.
            record.engine = None

        with self._lock:
            previous = self._jobs.get(self._latest_job_id) if self._latest_job_id else None
            if previous is not None:
                previous.job = replace(previous.job, result=None)
            record.job = replace(
                record.job,
                state=SimulationState.COMPLETED,
                progress=100,
                summary=result.summary(),
                result=result,
            )
            self._latest_job_id = job_id
        logger.info(
            "Simulation %s completed: senas=%s quinas=%s quadras=%s",
            job_id,
            result.senas,
            result.quinas,
            result.quadras,
        )
