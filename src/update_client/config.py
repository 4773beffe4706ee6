"""Client configuration with environment variable overrides."""

import logging
import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from update_client.errors import UsageError

ENV_PREFIX = "UPDATE_CLIENT_"


class ClientConfig(BaseModel):
    """Where the update service lives and how the client reports.

    Every field can be overridden with an ``UPDATE_CLIENT_*`` variable, e.g.
    ``UPDATE_CLIENT_SERVICE_URL=http://10.0.0.2:12315``.
    """

    service_url: str = Field(
        "http://127.0.0.1:12315",
        pattern=r"^https?://.+",
        description="Base URL of the update service",
    )
    callback_host: str = Field(
        "127.0.0.1", description="Interface the callback server listens on"
    )
    callback_port: int = Field(
        0, ge=0, le=65535, description="Callback server port (0 = ephemeral)"
    )
    timeout: Optional[float] = Field(
        None, gt=0, description="Per-call timeout in seconds (unset = wait forever)"
    )
    log_file: Optional[str] = Field(None, description="Rotating log file path")
    log_level: str = Field("INFO", description="DEBUG/INFO/WARNING/ERROR")

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, v: str) -> str:
        """Only accept level names the logging module knows."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        """Build config from defaults plus ``UPDATE_CLIENT_*`` overrides.

        Raises:
            UsageError: If an override does not validate
        """
        environ = os.environ if environ is None else environ
        overrides = {}
        for name in cls.model_fields:
            value = environ.get(f"{ENV_PREFIX}{name.upper()}")
            if value:
                overrides[name] = value

        try:
            return cls(**overrides)
        except ValidationError as e:
            raise UsageError(f"Invalid configuration: {e}") from e
