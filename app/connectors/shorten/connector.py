"""Clicks Connector: Schema & Data Entry Points."""

import time
from typing import Any, Dict, List

from app.connectors.shorten.client import ShortenClient
from app.connectors.shorten.credentials import CredentialManager
from app.connectors.shorten.transformer import map_to_rows
from app.core.field_registry import all_fields, schema_for
from app.core.logging import get_logger
from app.models.connector_models import (
    ConfigRequest,
    ConfigResponse,
    DataRequest,
    SchemaRequest,
)

logger = get_logger("shorten.connector")


class ClicksConnector:
    """Serves getConfig, getSchema and getData for the clicks source."""

    def __init__(self, client: ShortenClient, credentials: CredentialManager):
        self.client = client
        self.credentials = credentials

    def get_config(self, request: ConfigRequest | None = None) -> ConfigResponse:
        # No user-configurable options
        return ConfigResponse()

    def get_schema(self, request: SchemaRequest | None = None) -> Dict[str, Any]:
        return {"schema": [f.to_schema() for f in all_fields()]}

    async def get_data(self, request: DataRequest) -> Dict[str, Any]:
        """Fetch clicks with the stored key and map them to rows.

        Either returns the complete row set or raises ShortenAPIError.
        """
        requested_ids: List[str] = [f.name for f in request.fields]
        requested_fields = schema_for(requested_ids)

        started = time.monotonic()
        records = await self.client.fetch_clicks(self.credentials.stored_key())
        rows = map_to_rows(requested_fields, records)

        logger.info(
            f"Served {len(rows)} rows for fields {[f.id for f in requested_fields]}",
            extra={
                "field_count": len(requested_fields),
                "row_count": len(rows),
                "duration_ms": round((time.monotonic() - started) * 1000, 1),
            },
        )
        return {
            "schema": [f.to_schema() for f in requested_fields],
            "rows": rows,
        }
