"""Configuration management using pydantic-settings."""

from dataclasses import dataclass
from datetime import timedelta

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "change-me-in-production-use-env-var"


@dataclass(frozen=True)
class AuthConfig:
    """Read-only auth parameters handed to the token issuer and credential store.

    Built once at startup from Settings and shared by every request.
    """

    secret: str
    token_ttl: timedelta
    hash_cost: int
    algorithm: str = "HS256"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    database_path: str = "./data/pocketnotes.db"
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    environment: str = "development"

    # JWT Configuration
    jwt_secret_key: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_expiry_days: int = 30

    # Bcrypt work factor (higher = more secure but slower)
    # For tests, use 4 for faster execution while maintaining functionality
    bcrypt_work_factor: int = 10

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False
    )

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Refuse the placeholder JWT secret outside development."""
        if (
            self.environment != "development"
            and self.jwt_secret_key == DEFAULT_JWT_SECRET
        ):
            raise ValueError(
                "JWT_SECRET_KEY must be set to a secure value in "
                "non-development environments"
            )
        return self

    def auth_config(self) -> AuthConfig:
        """Snapshot the auth-related settings into an immutable AuthConfig."""
        return AuthConfig(
            secret=self.jwt_secret_key,
            token_ttl=timedelta(days=self.jwt_expiry_days),
            hash_cost=self.bcrypt_work_factor,
            algorithm=self.jwt_algorithm,
        )


settings = Settings()
