"""Import finished matches from football-data.org into local JSON files.

Fetches every configured competition-season through the feed adapter,
caches the raw responses, and writes one match-record JSON file per
dataset under ``data/matches``.

Requires the ``FOOTBALL_API_KEY`` environment variable.

Usage::

    python scripts/import_matches.py
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from tqdm import tqdm

# ---------------------------------------------------------------------------
# Ensure the src package is importable when running as a standalone script.
# ---------------------------------------------------------------------------
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_PROJECT_ROOT / "src"))

from matchstats.adapters import FootballDataAdapter, dump_matches  # noqa: E402
from matchstats.config import EngineConfig  # noqa: E402
from matchstats.exceptions import AdapterError  # noqa: E402

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)

CONFIG = EngineConfig(
    cache_dir=_PROJECT_ROOT / "data" / "feed_cache",
    data_dir=_PROJECT_ROOT / "data" / "matches",
)


# ------------------------------------------------------------------
# Dataset definitions
# ------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Dataset:
    """A single competition-season to import.

    Attributes:
        label: Human-readable label, also used as the output file stem.
        competition_id: football-data.org competition identifier.
        season: Season start year.
    """

    label: str
    competition_id: int
    season: int


DATASETS: tuple[Dataset, ...] = (
    Dataset("champions_league_2024", competition_id=2001, season=2024),
    Dataset("premier_league_2024", competition_id=2021, season=2024),
)


def main() -> None:
    """Import every configured dataset and log a summary."""
    adapter = FootballDataAdapter(
        config=CONFIG.feed,
        cache_dir=CONFIG.cache_dir,
        on_malformed=CONFIG.stats.on_malformed,
    )

    imported: dict[str, int] = {}
    for dataset in tqdm(DATASETS, desc="Importing", unit="dataset"):
        try:
            matches = adapter.fetch_matches(dataset.competition_id, dataset.season)
        except AdapterError:
            logger.exception("Import failed for %s", dataset.label)
            continue

        out_path = CONFIG.data_dir / f"{dataset.label}.json"
        dump_matches(matches, out_path)
        imported[dataset.label] = len(matches)
        logger.info("Wrote %d matches to %s", len(matches), out_path)

    sep = "=" * 72
    logger.info(sep)
    logger.info("IMPORT SUMMARY")
    logger.info(sep)
    for label, count in imported.items():
        logger.info("  %-32s %6d matches", label, count)
    logger.info(
        "Datasets imported: %d / %d",
        len(imported),
        len(DATASETS),
    )


if __name__ == "__main__":
    main()
