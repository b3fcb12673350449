from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="KEYLIGHT_", extra="ignore", frozen=True
    )

    app_name: str = "Elgato Key Light Exporter"

    # Device
    ipaddress: str = "192.168.1.209"
    port: int = Field(default=9123, ge=1, le=65535)
    poll_path: str = "elgato/lights"

    # Polling
    timeout_seconds: float = Field(default=1.0, gt=0)
    poll_interval_seconds: float = Field(default=10.0, gt=0)

    # Metrics server
    metric_host: str = "0.0.0.0"
    metric_port: int = Field(default=9091, ge=1, le=65535)
    metric_path: str = "/metrics"

    # Raw body archive directory ("" or unset disables it)
    datastore: Optional[str] = None

    # Parse this file, print the metrics and exit
    file: Optional[str] = None

    log_level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = "INFO"
    log_file: Optional[str] = None

    @field_validator("metric_path")
    @classmethod
    def _leading_slash(cls, v: str) -> str:
        return v if v.startswith("/") else "/" + v

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @field_validator("datastore", "file", "log_file")
    @classmethod
    def _blank_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    @property
    def poll_url(self) -> str:
        return f"http://{self.ipaddress}:{self.port}/{self.poll_path}"
