"""Compute match statistics over the locally imported match files.

Loads every JSON file in ``data/matches`` into an in-memory store,
aggregates the configured date range, logs the league and player
tables, and writes the full report to ``data/output/stats.json``.

Usage::

    python scripts/compute_stats.py
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from tqdm import tqdm

# ---------------------------------------------------------------------------
# Ensure the src package is importable when running as a standalone script.
# ---------------------------------------------------------------------------
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_PROJECT_ROOT / "src"))

from matchstats.adapters import load_matches  # noqa: E402
from matchstats.aggregation import compute_stats, player_table, team_table  # noqa: E402
from matchstats.config import EngineConfig  # noqa: E402
from matchstats.exceptions import MatchStatsError  # noqa: E402
from matchstats.store import InMemoryMatchStore  # noqa: E402

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)

CONFIG = EngineConfig(data_dir=_PROJECT_ROOT / "data" / "matches")
OUTPUT_PATH = _PROJECT_ROOT / "data" / "output" / "stats.json"

# Inclusive ISO date bounds; None leaves that side open.
START_DATE: str | None = None
END_DATE: str | None = None


def _load_store(data_dir: Path) -> InMemoryMatchStore:
    """Load every ``*.json`` match file in *data_dir* into one store."""
    store = InMemoryMatchStore()
    for path in tqdm(sorted(data_dir.glob("*.json")), desc="Loading", unit="file"):
        try:
            store.extend(load_matches(path, on_malformed=CONFIG.stats.on_malformed))
        except MatchStatsError:
            logger.exception("Failed to load %s", path)
    return store


def main() -> None:
    """Aggregate the stored matches and report the results."""
    if not CONFIG.data_dir.is_dir():
        logger.error("No match data in %s -- run import_matches.py first", CONFIG.data_dir)
        return

    store = _load_store(CONFIG.data_dir)
    logger.info("Loaded %d matches from %s", len(store), CONFIG.data_dir)

    try:
        report = compute_stats(store, START_DATE, END_DATE, config=CONFIG.stats)
    except MatchStatsError:
        logger.exception("Statistics computation failed")
        return

    sep = "=" * 72
    logger.info(sep)
    logger.info("LEAGUE TABLE (%d matches)", report.match_count)
    logger.info(sep)
    logger.info("\n%s", team_table(report))

    logger.info(sep)
    logger.info("PLAYERS")
    logger.info(sep)
    logger.info("\n%s", player_table(report).head(20))

    for entry in report.rankings.top_scorers:
        logger.info("  Top scorer: %-28s %3d goals", entry.name, entry.goals)
    for entry in report.rankings.top_assist_providers:
        logger.info("  Top assist: %-28s %3d assists", entry.name, entry.assists)

    OUTPUT_PATH.parent.mkdir(parents=True, exist_ok=True)
    OUTPUT_PATH.write_bytes(report.to_json(indent=True))
    logger.info("Wrote report to %s", OUTPUT_PATH)


if __name__ == "__main__":
    main()
