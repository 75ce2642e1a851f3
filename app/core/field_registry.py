"""Clicks Connector: Field Registry.

Declares the fixed catalog of selectable fields together with the function
that extracts each field's value from a raw click record. Catalog order is
the declaration order below; the host's column order derives from it.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional

from pydantic import BaseModel

ClickRecord = Dict[str, Any]
Extractor = Callable[[ClickRecord, List[ClickRecord]], Any]


class ConceptType(str, Enum):
    DIMENSION = "DIMENSION"
    METRIC = "METRIC"


class SemanticType(str, Enum):
    """Host field types used by this connector."""

    TEXT = "TEXT"
    COUNTRY_CODE = "COUNTRY_CODE"
    YEAR_MONTH_DAY = "YEAR_MONTH_DAY"
    HOUR = "HOUR"
    URL = "URL"
    NUMBER = "NUMBER"


class AggregationType(str, Enum):
    COUNT = "COUNT"


class FieldDefinition(BaseModel):
    """Immutable descriptor of one selectable field."""

    id: str
    concept_type: ConceptType
    semantic_type: SemanticType
    aggregation: Optional[AggregationType] = None

    model_config = {"frozen": True}

    def to_schema(self) -> Dict[str, Any]:
        """Render the field as a host schema entry."""
        entry: Dict[str, Any] = {
            "name": self.id,
            "label": self.id,
            "dataType": "NUMBER" if self.semantic_type == SemanticType.NUMBER else "STRING",
            "semantics": {
                "conceptType": self.concept_type.value,
                "semanticType": self.semantic_type.value,
            },
        }
        if self.aggregation is not None:
            entry["defaultAggregationType"] = self.aggregation.value
        return entry


# ─────────────────────────────────────────────
# TIMESTAMP FORMATTING
# ─────────────────────────────────────────────


def format_date(created_at: Optional[float]) -> str:
    """Epoch millis -> ``YYYYMMDD`` calendar date in UTC."""
    if created_at is None:
        return ""
    return datetime.fromtimestamp(created_at / 1000, tz=timezone.utc).strftime("%Y%m%d")


def format_hour(created_at: Optional[float]) -> str:
    """Epoch millis -> two-digit hour in the process's local time zone.

    Unlike format_date this is not UTC. Kept as-is until the upstream
    owner confirms which zone reports should use.
    """
    if created_at is None:
        return ""
    return datetime.fromtimestamp(created_at / 1000).strftime("%H")


# ─────────────────────────────────────────────
# CLICK FIELDS: Canonical Catalog
# ─────────────────────────────────────────────


def _attr(name: str) -> Extractor:
    def extract(record: ClickRecord, batch: List[ClickRecord]) -> Any:
        return record.get(name)

    return extract


def _batch_size(record: ClickRecord, batch: List[ClickRecord]) -> int:
    return len(batch)


# (id, concept, semantic type, aggregation, extractor)
_FIELD_SPECS = (
    ("aliasName", ConceptType.DIMENSION, SemanticType.TEXT, None, _attr("alias")),
    ("aliasId", ConceptType.DIMENSION, SemanticType.TEXT, None, _attr("aliasId")),
    ("browser", ConceptType.DIMENSION, SemanticType.TEXT, None, _attr("browser")),
    ("country", ConceptType.DIMENSION, SemanticType.COUNTRY_CODE, None, _attr("country")),
    (
        "date",
        ConceptType.DIMENSION,
        SemanticType.YEAR_MONTH_DAY,
        None,
        lambda record, batch: format_date(record.get("createdAt")),
    ),
    (
        "hour",
        ConceptType.DIMENSION,
        SemanticType.HOUR,
        None,
        lambda record, batch: format_hour(record.get("createdAt")),
    ),
    ("destination", ConceptType.DIMENSION, SemanticType.URL, None, _attr("destination")),
    ("domain", ConceptType.DIMENSION, SemanticType.TEXT, None, _attr("domain")),
    # Misspelled id is what existing reports reference
    ("opreatingSystem", ConceptType.DIMENSION, SemanticType.TEXT, None, _attr("os")),
    # Every row repeats the size of the whole fetched batch
    ("clickCount", ConceptType.METRIC, SemanticType.NUMBER, AggregationType.COUNT, _batch_size),
)

FIELD_EXTRACTORS: Dict[str, Extractor] = {spec[0]: spec[4] for spec in _FIELD_SPECS}


# ─────────────────────────────────────────────
# HELPERS
# ─────────────────────────────────────────────


def all_fields() -> List[FieldDefinition]:
    """Build the full catalog. A new list is returned on every call."""
    return [
        FieldDefinition(
            id=field_id,
            concept_type=concept,
            semantic_type=semantic,
            aggregation=aggregation,
        )
        for field_id, concept, semantic, aggregation, _ in _FIELD_SPECS
    ]


def schema_for(field_ids: Iterable[str]) -> List[FieldDefinition]:
    """Filter the catalog to the requested ids, keeping catalog order."""
    wanted = set(field_ids)
    return [f for f in all_fields() if f.id in wanted]


def get_extractor(field_id: str) -> Extractor | None:
    """Look up the extractor for a field id."""
    return FIELD_EXTRACTORS.get(field_id)
