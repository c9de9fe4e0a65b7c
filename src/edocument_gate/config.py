"""
Edocument API Gate Configuration

Environment-based configuration for the request gate. The approved
transport scheme and the token verifier settings are read once at startup.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator


class Settings(BaseSettings):
    """Gate settings with environment variable support"""

    # Environment
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=False, description="Debug mode")

    # Transport
    secure_scheme: str = Field(
        default="https",
        description="Scheme every request must arrive over (SECURE_SCHEME)"
    )

    # Token verification
    secret_key: Optional[str] = Field(default=None, description="JWT verification key")
    algorithm: str = Field(default="HS256", description="JWT algorithm")
    token_audience: Optional[str] = Field(default=None, description="Expected token audience")
    token_issuer: Optional[str] = Field(default=None, description="Expected token issuer")
    verifier_timeout_seconds: float = Field(
        default=5.0,
        description="Upper bound on a single token verification call"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")
    log_format: str = Field(default="text", description="Log format (text or json)")

    # Server
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=9292, description="Bind port")

    @field_validator("secure_scheme")
    @classmethod
    def validate_secure_scheme(cls, v: str) -> str:
        v = v.strip()
        if not v or not v.isascii() or not v.replace("+", "").replace("-", "").replace(".", "").isalnum():
            raise ValueError("SECURE_SCHEME must be a URL scheme such as 'https'")
        return v.lower()

    @field_validator("verifier_timeout_seconds")
    @classmethod
    def validate_verifier_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("VERIFIER_TIMEOUT_SECONDS must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in {"text", "json"}:
            raise ValueError("LOG_FORMAT must be 'text' or 'json'")
        return v

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


@lru_cache()
def get_settings() -> Settings:
    """Get the process-wide gate settings"""
    return Settings()

