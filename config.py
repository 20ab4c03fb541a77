"""Configuration management for the nvidia-smi exporter"""
from pathlib import Path
from typing import Literal, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Configuration class with Pydantic validation and environment-based settings"""

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

    # Server settings
    metrics_port: int = Field(default=9101, ge=1, le=65535, description="Metrics server port")
    metrics_host: str = Field(default="0.0.0.0", description="Metrics server host")

    # nvidia-smi settings
    nvidia_smi_command: str = Field(default="nvidia-smi", description="nvidia-smi executable, looked up on PATH")
    nvidia_smi_timeout: float = Field(default=10.0, ge=0, description="nvidia-smi timeout in seconds (0 disables)")
    skip_malformed_rows: bool = Field(default=False, description="Drop bad rows instead of failing the whole scrape")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO", description="Log level")
    log_file: Optional[Path] = Field(default=None, description="Optional log file path")

    # HTTP middleware
    enable_request_logging: bool = Field(default=True, description="Enable HTTP request logging")
    enable_compression: bool = Field(default=True, description="Gzip responses when the client accepts it")
    compression_minimum_size: int = Field(default=500, ge=0, description="Smallest response body to compress, in bytes")

    # Service settings
    service_name: str = Field(default="nvidia-smi-exporter", description="Service name")
    service_version: str = Field(default="0.1.0", description="Service version")

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, v):
        """Accept log levels in any case"""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator('log_file', mode='before')
    @classmethod
    def empty_log_file(cls, v):
        """Treat an empty LOG_FILE as unset"""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator('nvidia_smi_command')
    @classmethod
    def validate_command(cls, v):
        if not v.strip():
            raise ValueError("NVIDIA_SMI_COMMAND must not be empty")
        return v.strip()

    @property
    def listen_address(self) -> str:
        return f"{self.metrics_host}:{self.metrics_port}"
