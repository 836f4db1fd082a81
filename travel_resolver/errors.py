from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class TravelDataError(Exception):
    """Base class for everything the resolution layer raises or reports."""


class ProviderNotConfigured(TravelDataError):
    def __init__(self, message: str = "Amadeus credentials are not configured"):
        super().__init__(message)


class ProviderRequestFailed(TravelDataError):
    """The live provider could not produce an entity. ``cause`` is kept for diagnostics only."""

    NETWORK = "network"
    AUTH = "auth"
    HTTP = "http"
    EMPTY = "empty"
    MALFORMED = "malformed"

    def __init__(self, kind: str, message: str, cause: Optional[BaseException] = None):
        super().__init__(f"{kind}: {message}")
        self.kind = kind
        self.cause = cause


class SchemaValidationFailed(TravelDataError):
    """The generative backend could not be coerced into the requested schema."""

    def __init__(self, schema_name: str, detail: str):
        super().__init__(f"fallback output did not match {schema_name}: {detail}")
        self.schema_name = schema_name
        self.detail = detail


class APIError(HTTPException):
    def __init__(self, status_code: int, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(status_code=status_code, detail=message)
        self.code = code
        self.details = details


class UpstreamGenerationError(APIError):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(status.HTTP_502_BAD_GATEWAY, "FALLBACK_SCHEMA_FAILED", message, details)


def error_content(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return {"error": {"code": code, "message": message, "details": details}}
