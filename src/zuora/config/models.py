"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, zuora.toml only contains
overrides. A working config needs only ``username`` and ``password``.
"""

from __future__ import annotations

from pydantic import BaseModel

from zuora.infrastructure.transport import PRODUCTION_ENDPOINT, SANDBOX_ENDPOINT


class ApiConfig(BaseModel):
    """[api] section."""

    model_config = {"frozen": True}

    endpoint: str = PRODUCTION_ENDPOINT
    sandbox_endpoint: str = SANDBOX_ENDPOINT
    api_version: str = "63.0"
    timeout: float = 60.0
    verify_ssl: bool = True
    wsdl_path: str | None = None
