"""Run one Monte Carlo simulation from the command line.

Usage:
  python scripts/simulate.py --dozens 8 --iterations 200000
  python scripts/simulate.py --dozens 15 --iterations 1000000 --seed 42 --export-dir out/

Options:
  --batch-size 10000
  --export-dir DIR   (writes winners_<tier>.csv for every non-empty tier)
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import random
from collections.abc import Sequence

from tqdm import tqdm

from sena_simulator.errors import AppError
from sena_simulator.models.simulation import PrizeTier
from sena_simulator.services.combinatorics import compute_wager_details
from sena_simulator.services.draw_service import DrawService
from sena_simulator.services.export_service import rows_to_csv
from sena_simulator.services.simulation_service import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_MAX_ITERATIONS,
    SimulationEngine,
)


logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Simulate random wagers against one reference draw")
    parser.add_argument("--dozens", dest="dozens", type=int, default=8)
    parser.add_argument("--iterations", dest="iterations", type=int, default=200_000)
    parser.add_argument("--batch-size", dest="batch_size", type=int, default=DEFAULT_BATCH_SIZE)
    parser.add_argument("--seed", dest="seed", type=int, default=None)
    parser.add_argument("--export-dir", dest="export_dir", type=pathlib.Path, default=None)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    try:
        engine = SimulationEngine(
            args.dozens,
            args.iterations,
            DrawService(random.Random(args.seed)),
            batch_size=args.batch_size,
            max_iterations=DEFAULT_MAX_ITERATIONS,
        )
    except AppError as exc:
        raise SystemExit(f"{exc.message}: {exc.details}") from exc

    details = compute_wager_details(args.dozens)
    logger.info(
        "Wager of %s dozens: %s bets, cost %.2f, sena odds 1 in %.0f",
        details.size,
        details.ticket_count,
        details.total_cost,
        details.top_prize_odds,
    )

    with tqdm(total=100, unit="%", desc="Simulating") as bar:

        def _advance(percent: int) -> None:
            bar.update(percent - bar.n)

        result = engine.run(progress_cb=_advance)

    logger.info("Reference draw: %s", "-".join(f"{n:02d}" for n in result.reference_draw))
    for tier in PrizeTier:
        logger.info("%s (%s hits): %s", tier.value, tier.matches, result.count_for(tier))

    if args.export_dir is not None:
        args.export_dir.mkdir(parents=True, exist_ok=True)
        for tier in PrizeTier:
            tickets = result.tickets_for(tier)
            if not tickets:
                continue
            path = args.export_dir / f"winners_{tier.value}.csv"
            path.write_text(rows_to_csv(tickets), encoding="utf-8")
            logger.info("Wrote %s tickets to %s", len(tickets), path)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
