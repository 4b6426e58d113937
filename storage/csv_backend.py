from __future__ import annotations

import csv
import logging
import math
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Iterable, List

from storage.schema import CSV_HEADERS

logger = logging.getLogger(__name__)


def _cell(v: Any) -> Any:
    if v is None:
        return ""
    if isinstance(v, float) and math.isfinite(v):
        # fixed-point, never exponent notation
        return format(Decimal(repr(v)), "f")
    return v


class CSVStorage:
    def __init__(self, path):
        self.path = Path(path)

    def _row(self, rec: Dict[str, Any]) -> List[Any]:
        return [_cell(rec.get(h)) for h in CSV_HEADERS]

    def write_records(self, records: Iterable[Dict[str, Any]]) -> bool:
        """
        Write the header plus one row per record. Returns False when the file
        could not be written; the error is logged, not raised.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # lone surrogates from the API are escaped rather than failing the write
            with open(self.path, "w", newline="", encoding="utf-8", errors="backslashreplace") as f:
                writer = csv.writer(f)
                writer.writerow(CSV_HEADERS)
                for rec in records:
                    writer.writerow(self._row(rec))
        except (OSError, csv.Error, UnicodeError) as e:
            logger.error("Failed to write CSV %s: %s", self.path, e)
            return False
        return True
