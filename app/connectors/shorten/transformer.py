"""Clicks Connector: Raw Clicks → Host Rows Transformer.

Flattens click records into positional rows whose values follow the order
of the requested (catalog-filtered) fields.
"""

from typing import Any, Dict, List, Sequence

from app.core.field_registry import ClickRecord, FieldDefinition, get_extractor
from app.core.logging import get_logger

logger = get_logger("shorten.transformer")

RowDict = Dict[str, List[Any]]


def _extract(field: FieldDefinition, record: ClickRecord, batch: List[ClickRecord]) -> Any:
    extractor = get_extractor(field.id)
    if extractor is None:
        return ""
    return extractor(record, batch)


def map_to_rows(
    requested_fields: Sequence[FieldDefinition],
    records: Sequence[ClickRecord],
) -> List[RowDict]:
    """Map each click record to ``{"values": [...]}``.

    Row order follows ``records``; value order follows ``requested_fields``.
    """
    batch = list(records)
    rows = [
        {"values": [_extract(field, record, batch) for field in requested_fields]}
        for record in batch
    ]
    logger.debug(
        f"Mapped {len(rows)} rows",
        extra={"field_count": len(requested_fields), "row_count": len(rows)},
    )
    return rows
