"""Clicks Connector: Credential Manager.

Owns the lifecycle of the single stored API key. Validation is always a
live probe; nothing about key validity is cached locally.
"""

from typing import Optional

from app.config import settings
from app.connectors.shorten.client import ShortenClient, ProbeOutcome
from app.connectors.shorten.properties import PropertyStore
from app.core.logging import get_logger, mask_key
from app.models.connector_models import (
    AuthType,
    AuthTypeResponse,
    ErrorCode,
    SetCredentialsResponse,
)

logger = get_logger("shorten.credentials")


class CredentialManager:
    """Validate, persist and clear the Shorten.REST API key."""

    def __init__(
        self,
        client: ShortenClient,
        store: PropertyStore,
        property_key: str | None = None,
    ):
        self.client = client
        self.store = store
        self.property_key = property_key or settings.credential_property_key

    def auth_type(self) -> AuthTypeResponse:
        return AuthTypeResponse(type=AuthType.KEY, helpUrl=settings.auth_help_url)

    def stored_key(self) -> Optional[str]:
        return self.store.get_property(self.property_key)

    def clear_credentials(self) -> None:
        self.store.delete_property(self.property_key)
        logger.info("Stored API key cleared")

    async def probe_stored_key(self) -> ProbeOutcome:
        return await self.client.probe(self.stored_key())

    async def is_valid(self) -> bool:
        """True iff the stored key (possibly absent) currently gets HTTP 200."""
        outcome = await self.probe_stored_key()
        return outcome.is_valid

    async def set_credentials(self, candidate_key: str) -> SetCredentialsResponse:
        """Probe ``candidate_key`` and persist it only if the probe succeeds."""
        outcome = await self.client.probe(candidate_key)
        if not outcome.is_valid:
            logger.warning(
                f"Rejected API key {mask_key(candidate_key)} ({outcome.value})"
            )
            return SetCredentialsResponse(errorCode=ErrorCode.INVALID_CREDENTIALS)

        self.store.set_property(self.property_key, candidate_key)
        logger.info(f"Stored API key {mask_key(candidate_key)}")
        return SetCredentialsResponse(errorCode=ErrorCode.NONE)
