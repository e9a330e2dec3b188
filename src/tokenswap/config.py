"""Application configuration using pydantic-settings.

Deployment values mirror what the swap is constructed with: the admin
account, the two token symbols, the initial rate and both fee percentages.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Database
    # ======================
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/tokenswap.db",
        description="Database connection URL",
    )

    # ======================
    # API
    # ======================
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, description="API server port")

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=True, description="Enable debug mode")

    # ======================
    # Swap deployment
    # ======================
    admin_account: str = Field(
        default="", description="Account granted the ADMIN capability at deployment"
    )
    operator_account: str = Field(
        default="tokenswap",
        description="Ledger account the engine uses for custody and minting",
    )
    token_a_symbol: str = Field(default="TT", description="Token A (custody settlement)")
    token_a_name: str = Field(default="TransferToken", description="Token A display name")
    token_b_symbol: str = Field(default="MT", description="Token B (mint/burn settlement)")
    token_b_name: str = Field(default="MintableToken", description="Token B display name")
    swap_rate: int = Field(default=3, description="Units of token A per one unit of token B")
    fee_percent_a: int = Field(
        default=0, description="A -> B fee, scaled so 100% = 10_000_000_000"
    )
    fee_percent_b: int = Field(
        default=10 * 10**8, description="B -> A fee, scaled so 100% = 10_000_000_000"
    )

    # ======================
    # Safety
    # ======================
    lock_timeout: float = Field(
        default=30.0, description="Seconds to wait for the pair lock before failing"
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "database_url": self._redact_url(self.database_url),
            "swap": {
                "admin_account": self.admin_account or "(not set)",
                "operator_account": self.operator_account,
                "token_a": self.token_a_symbol,
                "token_b": self.token_b_symbol,
                "rate": self.swap_rate,
                "fee_percent_a": self.fee_percent_a,
                "fee_percent_b": self.fee_percent_b,
            },
        }

    @staticmethod
    def _redact_url(url: str) -> str:
        """Redact sensitive parts of database URL."""
        if "://" in url and "@" in url:
            proto, rest = url.split("://", 1)
            if "@" in rest:
                creds, host = rest.rsplit("@", 1)
                if ":" in creds:
                    user, _ = creds.split(":", 1)
                    return f"{proto}://{user}:***@{host}"
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
