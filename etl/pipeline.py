from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from common.categories import Category, EXPORT_ORDER
from common.settings import Settings, load_settings
from etl.transform import normalize
from ingestion.fetcher import EtherscanFetcher
from storage.csv_backend import CSVStorage

logger = logging.getLogger(__name__)


@dataclass
class ExportSummary:
    address: str
    path: Path
    counts: Dict[Category, int] = field(default_factory=dict)
    written: bool = False

    @property
    def total(self) -> int:
        return sum(self.counts.values())


def collect_records(fetcher) -> Tuple[List[dict], Dict[Category, int]]:
    """
    Fetch every category one after another, then normalize and concatenate
    them in export order.
    """
    raw = {cat: fetcher.fetch(cat) for cat in EXPORT_ORDER}

    records: List[dict] = []
    counts: Dict[Category, int] = {}
    for cat in EXPORT_ORDER:
        rows = normalize(cat, raw[cat])
        counts[cat] = len(rows)
        records.extend(rows)
        logger.info("Normalized %d %s records", len(rows), cat.value)
    return records, counts


def default_output_path(address: str, settings: Settings) -> Path:
    exp = settings.export
    return Path(exp.output_dir) / exp.filename_template.format(address=address)


def run_export(
    address: str,
    *,
    settings: Optional[Settings] = None,
    output_path: Optional[str] = None,
    fetcher=None,
) -> ExportSummary:
    st = settings or load_settings()
    # raises ConfigError before any request when the key is missing
    fetcher = fetcher or EtherscanFetcher(address, settings=st)

    records, counts = collect_records(fetcher)
    path = Path(output_path) if output_path else default_output_path(address, st)
    written = CSVStorage(path).write_records(records)
    return ExportSummary(address=address, path=path, counts=counts, written=written)
