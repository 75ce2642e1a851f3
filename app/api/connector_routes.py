"""Clicks Connector: Host Entry Point Routes.

One route per host entry point. Validation routes always answer with a
value; only getData can fail, when the upstream fetch fails.
"""

from typing import AsyncIterator

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlmodel import Session

from app.connectors.shorten.client import ShortenClient, ShortenAPIError
from app.connectors.shorten.connector import ClicksConnector
from app.connectors.shorten.credentials import CredentialManager
from app.connectors.shorten.properties import PropertyStore
from app.database import get_session
from app.core.logging import get_logger
from app.models.connector_models import (
    AuthTypeResponse,
    AuthValidResponse,
    ConfigRequest,
    ConfigResponse,
    DataRequest,
    DataResponse,
    SchemaRequest,
    SchemaResponse,
    SetCredentialsRequest,
    SetCredentialsResponse,
)

logger = get_logger("api.connector")

router = APIRouter(prefix="/connector", tags=["Connector"])


# ── Dependencies ──


async def get_shorten_client() -> AsyncIterator[ShortenClient]:
    client = ShortenClient()
    try:
        yield client
    finally:
        await client.close()


def get_property_store(session: Session = Depends(get_session)) -> PropertyStore:
    return PropertyStore(session)


def get_credential_manager(
    client: ShortenClient = Depends(get_shorten_client),
    store: PropertyStore = Depends(get_property_store),
) -> CredentialManager:
    return CredentialManager(client, store)


def get_connector(
    client: ShortenClient = Depends(get_shorten_client),
    credentials: CredentialManager = Depends(get_credential_manager),
) -> ClicksConnector:
    return ClicksConnector(client, credentials)


# ── Auth ──


@router.get("/auth-type", response_model=AuthTypeResponse)
async def get_auth_type(
    credentials: CredentialManager = Depends(get_credential_manager),
):
    """Single API key authentication."""
    return credentials.auth_type()


@router.post("/reset-auth", status_code=204)
async def reset_auth(
    credentials: CredentialManager = Depends(get_credential_manager),
):
    """Clear the stored API key."""
    credentials.clear_credentials()
    return Response(status_code=204)


@router.get("/auth-valid", response_model=AuthValidResponse)
async def is_auth_valid(
    credentials: CredentialManager = Depends(get_credential_manager),
):
    """Probe the stored API key against the clicks endpoint."""
    return AuthValidResponse(valid=await credentials.is_valid())


@router.post("/credentials", response_model=SetCredentialsResponse)
async def set_credentials(
    request: SetCredentialsRequest,
    credentials: CredentialManager = Depends(get_credential_manager),
):
    """Validate and store a new API key."""
    return await credentials.set_credentials(request.key)


# ── Config / Schema / Data ──


@router.post("/config", response_model=ConfigResponse)
async def get_config(
    request: ConfigRequest,
    connector: ClicksConnector = Depends(get_connector),
):
    return connector.get_config(request)


@router.post("/schema", response_model=SchemaResponse)
async def get_schema(
    request: SchemaRequest,
    connector: ClicksConnector = Depends(get_connector),
):
    """Full field catalog."""
    return connector.get_schema(request)


@router.post("/data", response_model=DataResponse)
async def get_data(
    request: DataRequest,
    connector: ClicksConnector = Depends(get_connector),
):
    """Rows for the requested fields, in catalog order."""
    try:
        return await connector.get_data(request)
    except ShortenAPIError as e:
        logger.error(
            f"getData failed: {e}", extra={"status_code": e.status_code}
        )
        raise HTTPException(
            status_code=502, detail="Failed to fetch clicks from Shorten.REST"
        )
