"""Score candidate lineups produced by an optimizer run."""

from __future__ import annotations

import logging
import multiprocessing as mp
import os
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from nexusdfs.config.valuation import DEFAULT_VALUATION_CONFIG, ValuationConfig
from nexusdfs.models import Contest, HistoricalData, Lineup
from nexusdfs.valuation import LineupSummary, LineupValuation, summarize_lineup, value_lineup


logger = logging.getLogger(__name__)

_WORKERS_ENV = "NEXUSDFS_SCORING_WORKERS"
_WORKERS_DEFAULT = 1
_PARALLEL_MIN_LINEUPS = 50


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def _scoring_workers() -> int:
    return _env_int(_WORKERS_ENV, _WORKERS_DEFAULT, min_value=1)


@dataclass(frozen=True)
class LineupCandidate:
    """Unique lineup with its valuation and display metrics."""

    signature: Tuple[str, ...]
    lineup: Lineup
    valuation: LineupValuation
    summary: LineupSummary
    count: int = 1

    @property
    def roi(self) -> float:
        return self.valuation.roi

    @property
    def nexus_score(self) -> float:
        return self.summary.nexus_score

    @property
    def strength(self) -> float:
        return self.valuation.lineup_strength

    @property
    def expected_value(self) -> float:
        return self.valuation.expected_value

    @property
    def projection(self) -> float:
        return self.summary.total_projection


@dataclass(frozen=True)
class _ScoringJob:
    lineup: Lineup
    contest: Contest
    historical: Optional[HistoricalData]
    config: ValuationConfig


def _score_job(job: _ScoringJob) -> Tuple[LineupValuation, LineupSummary]:
    return (
        value_lineup(job.lineup, job.contest, job.historical, config=job.config),
        summarize_lineup(job.lineup, job.config),
    )


def _dedupe(lineups: Iterable[Lineup]) -> Tuple[List[Lineup], dict[Tuple[str, ...], int]]:
    unique: List[Lineup] = []
    counts: dict[Tuple[str, ...], int] = {}
    for lineup in lineups:
        signature = lineup.signature()
        if signature not in counts:
            unique.append(lineup)
            counts[signature] = 0
        counts[signature] += 1
    return unique, counts


def score_lineups(
    lineups: Sequence[Lineup],
    contest: Contest,
    historical: Optional[HistoricalData] = None,
    *,
    workers: Optional[int] = None,
    config: ValuationConfig = DEFAULT_VALUATION_CONFIG,
) -> List[LineupCandidate]:
    """Value every unique lineup; duplicates are collapsed into ``count``.

    With more than one worker the valuations run in a spawn process pool.
    Results keep input order and match the serial path exactly.
    """

    unique, counts = _dedupe(lineups)
    jobs = [_ScoringJob(lineup, contest, historical, config) for lineup in unique]
    worker_count = workers if workers is not None else _scoring_workers()
    worker_count = max(1, min(worker_count, len(jobs) or 1))

    if worker_count > 1 and len(jobs) >= _PARALLEL_MIN_LINEUPS:
        logger.info("Scoring %s lineups across %s workers", len(jobs), worker_count)
        ctx = mp.get_context("spawn")
        with ctx.Pool(processes=worker_count) as pool:
            results = pool.map(_score_job, jobs, chunksize=max(1, len(jobs) // (worker_count * 4)))
    else:
        logger.info("Scoring %s lineups serially", len(jobs))
        results = [_score_job(job) for job in jobs]

    if len(unique) != len(lineups):
        logger.info("Collapsed %s duplicate lineups", len(lineups) - len(unique))

    return [
        LineupCandidate(
            signature=lineup.signature(),
            lineup=lineup,
            valuation=valuation,
            summary=summary,
            count=counts[lineup.signature()],
        )
        for lineup, (valuation, summary) in zip(unique, results)
    ]


__all__ = ["LineupCandidate", "score_lineups"]
