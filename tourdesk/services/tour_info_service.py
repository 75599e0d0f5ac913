from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from tourdesk.repositories.tour_info_repository import TourInfoRepository
from tourdesk.schemas.catalog import TourInfo, TourInfoImportResult


logger = logging.getLogger(__name__)

MIN_CATALOG_FIELDS = 4


@dataclass(frozen=True)
class CatalogRow:
    line_number: int
    fields: List[str]


def detect_delimiter(header: str) -> str:
    return ";" if header.count(";") > header.count(",") else ","


def read_catalog_rows(text: str) -> List[CatalogRow]:
    """Split a header-led catalog file into rows of stripped fields.

    Quoted fields may contain the delimiter. Blank lines are dropped.
    """
    lines = text.lstrip("\ufeff").splitlines()
    if not lines:
        return []
    delimiter = detect_delimiter(lines[0])
    reader = csv.reader(io.StringIO("\n".join(lines[1:])), delimiter=delimiter)
    rows: List[CatalogRow] = []
    for line_number, fields in enumerate(reader, start=2):
        stripped = [field.strip() for field in fields]
        if not any(stripped):
            continue
        rows.append(CatalogRow(line_number=line_number, fields=stripped))
    return rows


def build_tour_info_payload(row: CatalogRow) -> Optional[dict]:
    if len(row.fields) < MIN_CATALOG_FIELDS:
        return None
    seq, tour_name, service_name, price = row.fields[:MIN_CATALOG_FIELDS]
    note = row.fields[MIN_CATALOG_FIELDS] if len(row.fields) > MIN_CATALOG_FIELDS else ""
    return {
        "seq": int(seq),
        "tour_name": tour_name,
        "service_name": service_name,
        "price": price,
        "note": note or None,
    }


class TourInfoService:
    def __init__(self, repository: TourInfoRepository) -> None:
        self.repository = repository

    def list_tour_info(self) -> List[TourInfo]:
        return [TourInfo(**record.model_dump()) for record in self.repository.list_tour_info()]

    def replace_catalog(self, rows: Iterable[CatalogRow]) -> TourInfoImportResult:
        """Swap the whole catalog for ``rows``; bad rows are logged and skipped."""
        rows = list(rows)
        cleared = self.repository.delete_all()
        logger.info("Cleared %d existing tour info row(s)", cleared)

        imported = skipped = failed = 0
        for row in rows:
            try:
                payload = build_tour_info_payload(row)
                if payload is None:
                    skipped += 1
                    continue
                self.repository.insert_row(payload)
                imported += 1
            except Exception:
                failed += 1
                logger.exception("Failed to import line %d: %s", row.line_number, row.fields)
        logger.info("Imported %d tour info record(s)", imported)
        return TourInfoImportResult(
            total_rows=len(rows), imported=imported, skipped=skipped, failed=failed
        )
