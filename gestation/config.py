"""
Configuration management with environment variable support and validation.

Design principles:
- Environment-specific configs (dev, staging, prod)
- Validation at startup (fail fast)
- Type safety with Pydantic
- Secure defaults (no admin passwords in code)
"""

import os
from functools import lru_cache
from typing import Literal, cast

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

# Load environment variables from .env file
load_dotenv()


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    format: Literal["json", "console"] = Field(default="json", description="Logging format")


class ScheduleConfig(BaseModel):
    """Where the prenatal exam schedule is read from and saved to."""

    saved_path: str = Field(
        default="./data/exam_schedule.json",
        description="File holding the admin's customized schedule",
    )
    data_path: str | None = Field(
        default=None, description="Optional published schedule used when nothing is saved"
    )
    author: str = Field(default="", description="Author stamped on exported schedules")


class AuthConfig(BaseModel):
    """Admin editor authentication."""

    admin_passwords: list[str] = Field(
        default_factory=list, description="Accepted admin passwords"
    )
    token_secret: str | None = Field(
        default=None, description="HMAC secret; falls back to the first admin password"
    )
    token_ttl_hours: int = Field(default=24, gt=0, description="Admin token lifetime")

    @field_validator("admin_passwords")
    def strip_passwords(cls, v: list[str]) -> list[str]:
        return [p.strip() for p in v if p.strip()]


class CalculatorConfig(BaseModel):
    """Initial state of the calculator before the user enters anything."""

    default_weeks: int = Field(default=20, ge=0, le=45, description="Initial gestational weeks")
    default_days: int = Field(default=0, ge=0, le=6, description="Initial extra days")


class AppConfig(BaseModel):
    """Main application configuration combining all subsystems."""

    # Environment
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode")

    # Component configs
    logging: LoggingConfig
    schedule: ScheduleConfig
    auth: AuthConfig
    calculator: CalculatorConfig

    @model_validator(mode="after")
    def debug_only_in_dev(self) -> "AppConfig":
        """Ensure debug mode is only allowed in development environment."""
        if self.debug and self.environment != "development":
            raise ValueError("debug mode is only allowed in development environment")
        return self


def load_config_from_env() -> AppConfig:
    """Load configuration from environment variables with validation."""

    def _env_to_literal(val: str) -> Literal["development", "staging", "production"]:
        v = val.strip().lower()
        if v in {"dev", "development"}:
            return "development"
        if v in {"stage", "staging"}:
            return "staging"
        return "production"

    def _level_to_literal(val: str) -> Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
        v = val.strip().upper()
        return cast(
            Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            v if v in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} else "INFO",
        )

    def _optional(val: str | None) -> str | None:
        if val is None or not val.strip():
            return None
        return val.strip()

    # Detect environment
    environment = _env_to_literal(os.getenv("ENVIRONMENT", "development"))
    debug = environment == "development"

    logging_config = LoggingConfig(
        level=_level_to_literal(os.getenv("LOG_LEVEL", "INFO")),
        format="console" if debug else "json",
    )

    schedule_config = ScheduleConfig(
        saved_path=os.getenv("EXAM_SCHEDULE_SAVED_PATH", "./data/exam_schedule.json"),
        data_path=_optional(os.getenv("EXAM_SCHEDULE_DATA_PATH")),
        author=os.getenv("EXAM_SCHEDULE_AUTHOR", ""),
    )

    # Several admin passwords may be given separated by commas
    auth_config = AuthConfig(
        admin_passwords=os.getenv("ADMIN_PASSWORD", "").split(","),
        token_secret=_optional(os.getenv("TOKEN_SECRET")),
        token_ttl_hours=int(os.getenv("TOKEN_TTL_HOURS", "24")),
    )

    calculator_config = CalculatorConfig(
        default_weeks=int(os.getenv("DEFAULT_WEEKS", "20")),
        default_days=int(os.getenv("DEFAULT_DAYS", "0")),
    )

    return AppConfig(
        environment=environment,
        debug=debug,
        logging=logging_config,
        schedule=schedule_config,
        auth=auth_config,
        calculator=calculator_config,
    )


@lru_cache
def get_config() -> AppConfig:
    """Get cached application configuration."""
    return load_config_from_env()


def validate_config() -> None:
    """Validate configuration at startup."""
    try:
        config = get_config()
        print(f"✅ Configuration loaded for {config.environment} environment")

        if config.auth.admin_passwords:
            print("✅ Admin password configured")
        else:
            print("⚠️  No admin password configured, the schedule editor is disabled")

    except Exception as e:
        print(f"❌ Configuration validation failed: {e}")
        raise


def print_config_summary() -> None:
    """Print configuration summary for debugging."""
    config = get_config()

    print("\n🔧 CONFIGURATION SUMMARY")
    print(f"Environment: {config.environment}")
    print(f"Debug Mode: {config.debug}")
    print(f"Log Level: {config.logging.level}")

    print("\n🩺 EXAM SCHEDULE")
    print(f"Saved schedule: {config.schedule.saved_path}")
    print(f"Published schedule: {config.schedule.data_path or 'built-in defaults'}")

    print("\n🔐 ADMIN")
    print(f"Admin passwords: {len(config.auth.admin_passwords)}")
    print(f"Token lifetime: {config.auth.token_ttl_hours}h")

    print("\n🤰 CALCULATOR")
    calculator = config.calculator
    print(f"Initial gestational age: {calculator.default_weeks}w+{calculator.default_days}d")


if __name__ == "__main__":
    # Test configuration loading
    validate_config()
    print_config_summary()
