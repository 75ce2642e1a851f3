"""Clicks Connector: Host Contract Models.

Request and response bodies exchanged with the reporting host. Keys use the
host's camelCase names.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class AuthType(str, Enum):
    KEY = "KEY"


class ErrorCode(str, Enum):
    NONE = "NONE"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"


class AuthTypeResponse(BaseModel):
    """Response for getAuthType."""

    type: AuthType = AuthType.KEY
    helpUrl: str


class AuthValidResponse(BaseModel):
    valid: bool


class SetCredentialsRequest(BaseModel):
    """Request body for setCredentials."""

    key: str

    model_config = {
        "json_schema_extra": {"examples": [{"key": "your-shorten-rest-api-key"}]}
    }


class SetCredentialsResponse(BaseModel):
    errorCode: ErrorCode


class ConfigRequest(BaseModel):
    """Request body for getConfig. The host may send its locale."""

    languageCode: Optional[str] = None


class ConfigResponse(BaseModel):
    configParams: List[Dict[str, Any]] = Field(default_factory=list)


class SchemaRequest(BaseModel):
    """Request body for getSchema."""

    configParams: Dict[str, Any] = Field(default_factory=dict)


class SchemaResponse(BaseModel):
    schema_: List[Dict[str, Any]] = Field(alias="schema")

    model_config = {"populate_by_name": True}


class RequestedField(BaseModel):
    name: str


class DataRequest(BaseModel):
    """Request body for getData."""

    fields: List[RequestedField]
    configParams: Dict[str, Any] = Field(default_factory=dict)

    model_config = {
        "json_schema_extra": {
            "examples": [{"fields": [{"name": "date"}, {"name": "clickCount"}]}]
        }
    }


class Row(BaseModel):
    values: List[Any]


class DataResponse(BaseModel):
    schema_: List[Dict[str, Any]] = Field(alias="schema")
    rows: List[Row]

    model_config = {"populate_by_name": True}
