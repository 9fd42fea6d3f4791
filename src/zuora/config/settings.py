"""Unified settings: init kwargs, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs: options passed to the client or CLI flags
  2. Env vars: ``ZUORA_*`` prefix
  3. TOML file: ``zuora.toml`` discovered via walk-up
  4. Code defaults baked into the models

The snapshot is frozen. ``ZuoraClient.reconfigure`` swaps in a copy.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from zuora.config.discovery import find_config
from zuora.config.models import ApiConfig
from zuora.domain.errors import ConfigError


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``zuora.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise ConfigError(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class ZuoraSettings(BaseSettings):
    """Configuration snapshot consumed at client construction.

    Attributes:
        username: API user name.
        password: API password.
        sandbox: Use the sandbox endpoint.
        reuse_authentication_token: Keep one session across calls.
            When False, every call logs in again.
        log: Configure logging and log SOAP payloads at DEBUG.
        format_xml: Pretty-print logged payloads.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "ZUORA_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    username: str = ""
    password: SecretStr = SecretStr("")
    sandbox: bool = False
    reuse_authentication_token: bool = True

    log: bool = False
    log_json: bool = False
    format_xml: bool = False

    # --- CLI flags ---
    json_output: bool = False
    verbose: bool = False

    api: ApiConfig = Field(default_factory=ApiConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_options(
        cls,
        *,
        config_path: str | Path | None = None,
        start: Path | None = None,
        **options: Any,
    ) -> ZuoraSettings:
        """Construct settings, discovering ``zuora.toml`` unless a path is given."""
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if not p.is_file():
                msg = f"Config file not found: {p}"
                raise ConfigError(msg)
            toml_path = p
        else:
            toml_path = find_config(start)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **options)
        finally:
            _tls.toml_path = None

    @property
    def active_endpoint(self) -> str:
        return self.api.sandbox_endpoint if self.sandbox else self.api.endpoint
