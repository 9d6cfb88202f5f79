"""Historical contest store and CSV import."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from threading import Lock

from sena_simulator.data import SEED_HISTORY
from sena_simulator.errors import ImportFormatError, NoValidRecordsError
from sena_simulator.models.contest import HistoricalContest
from sena_simulator.models.wager import NUMBERS_PER_DRAW, UNIVERSE_MAX, Ticket

logger = logging.getLogger(__name__)

CONTEST_COLUMN = "concurso"
DATE_COLUMN = "data"
NUMBERS_COLUMN = "dezenas"
REQUIRED_COLUMNS = (CONTEST_COLUMN, DATE_COLUMN, NUMBERS_COLUMN)

_LINE_BREAK = re.compile(r"[\r\n]+")


class HistoryStore:
    """Owned, replace-only collection of historical contests."""

    def __init__(self, contests: Iterable[HistoricalContest] = SEED_HISTORY) -> None:
        self._lock = Lock()
        self._contests: tuple[HistoricalContest, ...] = tuple(contests)

    @property
    def contests(self) -> tuple[HistoricalContest, ...]:
        with self._lock:
            return self._contests

    def __len__(self) -> int:
        return len(self.contests)

    def replace(self, contests: Iterable[HistoricalContest]) -> None:
        snapshot = tuple(contests)
        with self._lock:
            self._contests = snapshot

    def restore_default(self) -> None:
        self.replace(SEED_HISTORY)

    def search(self, term: str | None) -> list[HistoricalContest]:
        """Contests whose number contains `term`; blank term matches all."""

        needle = (term or "").strip()
        contests = self.contests
        if not needle:
            return list(contests)
        return [c for c in contests if needle in str(c.contest_number)]


@dataclass(frozen=True)
class HistoryImportResult:
    contests: list[HistoricalContest]
    skipped_rows: list[int]


def _clean(cell: str) -> str:
    return cell.strip().replace('"', "")


def _parse_numbers(cell: str) -> Ticket | None:
    try:
        numbers = [int(piece) for piece in _clean(cell).split("-")]
    except ValueError:
        return None

    if len(numbers) != NUMBERS_PER_DRAW or len(set(numbers)) != NUMBERS_PER_DRAW:
        return None
    if any(n < 1 or n > UNIVERSE_MAX for n in numbers):
        return None
    return tuple(sorted(numbers))


def _parse_contest_number(cell: str) -> int | None:
    try:
        number = int(_clean(cell))
    except ValueError:
        return None
    return number if number > 0 else None


def parse_history_csv(text: str) -> HistoryImportResult:
    """Parse `concurso,data,dezenas` CSV text into contests, newest first.

    Structural problems abort the import. Bad data rows are skipped and
    logged; their 1-based line numbers are reported in `skipped_rows`.

    Raises:
        ImportFormatError: fewer than two non-blank lines, or missing columns.
        NoValidRecordsError: every data row was skipped.
    """

    rows = [row for row in _LINE_BREAK.split(text or "") if row.strip()]
    if len(rows) < 2:
        raise ImportFormatError(
            message="Invalid or empty CSV file. A header and at least one data row are required.",
        )

    header = [_clean(token).lower() for token in rows[0].split(",")]
    missing = [name for name in REQUIRED_COLUMNS if name not in header]
    if missing:
        raise ImportFormatError(
            message=f"Invalid CSV header. Missing required column(s): {', '.join(missing)}",
            details={"missing_columns": missing},
        )

    contest_idx = header.index(CONTEST_COLUMN)
    date_idx = header.index(DATE_COLUMN)
    numbers_idx = header.index(NUMBERS_COLUMN)

    contests: list[HistoricalContest] = []
    skipped: list[int] = []
    for line_no, row in enumerate(rows[1:], start=2):
        columns = row.split(",")
        if len(columns) < len(header):
            logger.warning("Skipping line %s: expected %s columns, got %s", line_no, len(header), len(columns))
            skipped.append(line_no)
            continue

        numbers = _parse_numbers(columns[numbers_idx])
        if numbers is None:
            logger.warning("Skipping line %s: invalid numbers %r", line_no, columns[numbers_idx])
            skipped.append(line_no)
            continue

        contest_number = _parse_contest_number(columns[contest_idx])
        if contest_number is None:
            logger.warning("Skipping line %s: invalid contest number %r", line_no, columns[contest_idx])
            skipped.append(line_no)
            continue

        contests.append(
            HistoricalContest(
                contest_number=contest_number,
                date=_clean(columns[date_idx]),
                numbers=numbers,
            )
        )

    if not contests:
        raise NoValidRecordsError(
            message="No valid contests found in file.",
            details={"skipped_rows": skipped},
        )

    contests.sort(key=lambda c: c.contest_number, reverse=True)
    return HistoryImportResult(contests=contests, skipped_rows=skipped)


class HistoryService:
    """History use-cases over an explicitly passed store."""

    def import_text(self, store: HistoryStore, text: str) -> HistoryImportResult:
        """Parse `text` and, only if it yields contests, replace the whole store."""

        result = parse_history_csv(text)
        store.replace(result.contests)
        logger.info(
            "Imported %s contests (%s rows skipped)",
            len(result.contests),
            len(result.skipped_rows),
        )
        return result

    def restore_default(self, store: HistoryStore) -> int:
        store.restore_default()
        logger.info("Restored default history (%s contests)", len(SEED_HISTORY))
        return len(SEED_HISTORY)

    def search(self, store: HistoryStore, term: str | None = None) -> list[HistoricalContest]:
        return store.search(term)
