"""Tests for the chunked simulation engine and the job manager."""

from __future__ import annotations

import random
import threading

import pytest

from sena_simulator.errors import ConflictError, NotFoundError, SimulationCancelledError, ValidationError
from sena_simulator.models.simulation import PrizeTier, SimulationState
from sena_simulator.services.draw_service import DrawService
from sena_simulator.services.simulation_service import SimulationEngine, SimulationJobManager


REFERENCE = (1, 2, 3, 4, 5, 6)


class TestClassification:
    def test_tickets_land_in_their_tier(self, scripted_draws):
        sena = (1, 2, 3, 4, 5, 6, 7, 8)
        quina = (1, 2, 3, 4, 5, 10, 11, 12)
        quadra_a = (1, 2, 3, 4, 20, 21, 22, 23)
        triple = (1, 2, 3, 30, 31, 32, 33, 34)
        miss = (40, 41, 42, 43, 44, 45, 46, 47)
        quadra_b = (3, 4, 5, 6, 50, 51, 52, 53)
        draws = scripted_draws([REFERENCE, sena, quina, quadra_a, triple, miss, quadra_b])

        result = SimulationEngine(8, 6, draws, batch_size=4).run()

        assert result.reference_draw == REFERENCE
        assert result.sena_tickets == (sena,)
        assert result.quina_tickets == (quina,)
        assert result.quadra_tickets == (quadra_a, quadra_b)
        assert (result.senas, result.quinas, result.quadras) == (1, 1, 2)
        assert result.iterations == 6
        assert result.wager_size == 8

    def test_tier_lookup_is_total(self, scripted_draws):
        draws = scripted_draws([REFERENCE, (1, 2, 3, 4, 5, 6)])
        result = SimulationEngine(6, 1, draws).run()
        assert result.tickets_for(PrizeTier.SENA) == ((1, 2, 3, 4, 5, 6),)
        for tier in (PrizeTier.QUINA, PrizeTier.QUADRA):
            assert result.count_for(tier) == 0

    @pytest.mark.parametrize("size", [6, 12, 20])
    def test_bucket_invariants_on_random_run(self, size):
        engine = SimulationEngine(size, 20_000, DrawService(random.Random(size)), batch_size=3_000)
        result = engine.run()

        reference = set(result.reference_draw)
        assert len(reference) == 6
        for tier in PrizeTier:
            for ticket in result.tickets_for(tier):
                assert len(ticket) == size
                assert list(ticket) == sorted(set(ticket))
                assert len(reference & set(ticket)) == tier.matches

        assert result.senas + result.quinas + result.quadras <= 20_000

    def test_large_wagers_hit_quadras(self):
        # 1 in 13 for twenty dozens.
        result = SimulationEngine(20, 5_000, DrawService(random.Random(3))).run()
        assert result.quadras > 0


class TestProgress:
    def test_progress_per_batch(self):
        seen: list[int] = []
        SimulationEngine(6, 25_000, DrawService(random.Random(1)), batch_size=10_000).run(progress_cb=seen.append)
        assert seen == [40, 80, 100]

    def test_progress_reaches_100_only_at_the_end(self):
        seen: list[int] = []
        SimulationEngine(6, 1_001, DrawService(random.Random(1)), batch_size=10).run(progress_cb=seen.append)

        assert seen == sorted(seen)
        assert seen[-1] == 100
        assert seen.count(100) == 1
        assert len(seen) == 101

    def test_iter_batches_suspends_between_batches(self):
        engine = SimulationEngine(6, 30, DrawService(random.Random(1)), batch_size=10)
        batches = engine.iter_batches()

        assert engine.state is SimulationState.IDLE
        assert next(batches) == 33
        assert engine.state is SimulationState.RUNNING
        assert engine.result is None

        assert list(batches) == [66, 100]
        assert engine.state is SimulationState.COMPLETED
        assert engine.result is not None


class TestLifecycle:
    def test_cancel_between_batches(self):
        calls = {"n": 0}

        def _cancel_after_two_batches() -> bool:
            calls["n"] += 1
            return calls["n"] > 2

        seen: list[int] = []
        engine = SimulationEngine(6, 100, DrawService(random.Random(1)), batch_size=10)
        with pytest.raises(SimulationCancelledError) as excinfo:
            engine.run(progress_cb=seen.append, cancel_check=_cancel_after_two_batches)

        assert seen == [10, 20]
        assert excinfo.value.details == {"completed": 20, "iterations": 100}
        assert engine.state is SimulationState.CANCELLED
        assert engine.result is None

    def test_abandoned_generator_is_cancelled(self):
        engine = SimulationEngine(6, 30, DrawService(random.Random(1)), batch_size=10)
        batches = engine.iter_batches()
        next(batches)
        batches.close()
        assert engine.state is SimulationState.CANCELLED

    def test_engine_runs_once(self):
        engine = SimulationEngine(6, 10, DrawService(random.Random(1)))
        engine.run()
        with pytest.raises(ConflictError):
            engine.run()

    def test_failing_draw_marks_engine_failed(self):
        draws = _FailingDrawService(fail_on=5)
        engine = SimulationEngine(6, 100, draws, batch_size=10)
        with pytest.raises(RuntimeError):
            engine.run()
        assert engine.state is SimulationState.FAILED
        assert engine.result is None

    def test_failing_reference_draw_marks_engine_failed(self):
        engine = SimulationEngine(6, 100, _FailingDrawService(fail_on=1))
        with pytest.raises(RuntimeError):
            engine.run()
        assert engine.state is SimulationState.FAILED

    @pytest.mark.parametrize("size", [5, 21])
    def test_rejects_wager_size(self, size):
        with pytest.raises(ValidationError):
            SimulationEngine(size, 10)

    @pytest.mark.parametrize("iterations", [0, -5, 5_000_001])
    def test_rejects_iterations(self, iterations):
        with pytest.raises(ValidationError):
            SimulationEngine(6, iterations)

    def test_custom_iteration_ceiling(self):
        with pytest.raises(ValidationError):
            SimulationEngine(6, 101, max_iterations=100)


class _GatedDrawService(DrawService):
    """Blocks the first draw until `gate` is set."""

    def __init__(self):
        super().__init__(random.Random(5))
        self.gate = threading.Event()
        self.entered = threading.Event()

    def spawn(self):
        return self

    def draw_distinct_numbers(self, count, universe_max=60):
        if not self.gate.is_set():
            self.entered.set()
            self.gate.wait(timeout=10)
        return super().draw_distinct_numbers(count, universe_max)


class _FailingDrawService(DrawService):
    """Raises on the `fail_on`-th draw (1 is the reference draw)."""

    def __init__(self, fail_on):
        super().__init__(random.Random(5))
        self.fail_on = fail_on
        self.calls = 0

    def spawn(self):
        return self

    def draw_distinct_numbers(self, count, universe_max=60):
        self.calls += 1
        if self.calls == self.fail_on:
            raise RuntimeError("entropy source unavailable")
        return super().draw_distinct_numbers(count, universe_max)


class TestJobManager:
    def test_completed_job(self):
        manager = SimulationJobManager(DrawService(random.Random(9)), batch_size=500, max_workers=1)
        try:
            job = manager.submit(10, 2_000)
            assert job.state is SimulationState.IDLE
            assert job.progress == 0

            done = manager.wait(job.job_id, timeout=30)
            assert done.state is SimulationState.COMPLETED
            assert done.progress == 100
            assert done.result is not None
            assert done.result.iterations == 2_000
            assert done.summary == done.result.summary()
            assert manager.latest().job_id == done.job_id
        finally:
            manager.shutdown()

    def test_newer_result_supersedes_older(self):
        manager = SimulationJobManager(DrawService(random.Random(9)), batch_size=500, max_workers=1)
        try:
            first = manager.wait(manager.submit(6, 1_000).job_id, timeout=30)
            assert first.result is not None
            second = manager.wait(manager.submit(20, 1_000).job_id, timeout=30)

            latest = manager.latest()
            assert latest.job_id == second.job_id
            assert latest.result is second.result
            assert latest.result.quadras > 0
        finally:
            manager.shutdown()

    def test_superseded_job_keeps_only_counts(self):
        manager = SimulationJobManager(DrawService(random.Random(9)), batch_size=500, max_workers=1)
        try:
            first = manager.wait(manager.submit(20, 1_000).job_id, timeout=30)
            manager.wait(manager.submit(6, 1_000).job_id, timeout=30)

            old = manager.get(first.job_id)
            assert old.state is SimulationState.COMPLETED
            assert old.result is None
            assert old.summary == first.summary
            assert old.summary.quadras == first.result.quadras
            assert old.summary.reference_draw == first.result.reference_draw
        finally:
            manager.shutdown()

    def test_latest_before_any_completed_run(self):
        manager = SimulationJobManager(max_workers=1)
        try:
            with pytest.raises(NotFoundError):
                manager.latest()
        finally:
            manager.shutdown()

    def test_crashed_job_is_failed_without_raising(self):
        manager = SimulationJobManager(_FailingDrawService(fail_on=3), batch_size=10, max_workers=1)
        try:
            job = manager.submit(6, 100)
            done = manager.wait(job.job_id, timeout=30)

            assert done.state is SimulationState.FAILED
            assert done.error == "internal_error"
            assert done.result is None
            assert done.summary is None
            assert manager._jobs[job.job_id].future.exception() is None
            with pytest.raises(NotFoundError):
                manager.latest()
        finally:
            manager.shutdown()

    def test_cancelled_job_has_no_result(self):
        draws = _GatedDrawService()
        manager = SimulationJobManager(draws, batch_size=100, max_workers=1)
        try:
            job = manager.submit(6, 1_000)
            assert draws.entered.wait(timeout=10)
            assert manager.active_count() == 1

            manager.cancel(job.job_id)
            draws.gate.set()

            done = manager.wait(job.job_id, timeout=30)
            assert done.state is SimulationState.CANCELLED
            assert manager.active_count() == 0
            assert done.result is None
            assert done.error == "simulation_cancelled"
            with pytest.raises(NotFoundError):
                manager.latest()
        finally:
            manager.shutdown()

    def test_invalid_parameters_fail_before_queueing(self):
        manager = SimulationJobManager(max_iterations=1_000, max_workers=1)
        try:
            with pytest.raises(ValidationError):
                manager.submit(6, 1_001)
        finally:
            manager.shutdown()

    def test_unknown_job(self):
        manager = SimulationJobManager(max_workers=1)
        try:
            with pytest.raises(NotFoundError):
                manager.get("missing")
            with pytest.raises(NotFoundError):
                manager.cancel("missing")
        finally:
            manager.shutdown()
