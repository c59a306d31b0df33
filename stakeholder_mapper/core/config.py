import sys

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    APP_ENV: str = "development"
    APP_DEBUG: bool = True
    APP_VERSION: str | None = None  # e.g. "1.2.3" or git SHA, used as Sentry release tag
    FRONTEND_URL: str = "http://localhost:3000"

    # Security
    MAX_REQUEST_BODY_BYTES: int = 1_048_576  # 1 MB

    # Sentry error monitoring: set SENTRY_DSN to enable; no-op when unset
    SENTRY_DSN: str | None = None
    SENTRY_ENVIRONMENT: str = "development"

    # Reports
    REPORT_MIN_STAKEHOLDERS: int = 3
    REPORT_ORG_NAME: str = "StrategAI Tools"
    REPORT_BRAND_COLOR: str = "#2563EB"
    REPORT_AUTO_PRINT: bool = True  # HTML export opens the print dialog on load

    # Org chart
    HIERARCHY_STRICT: bool = False  # reject reports-to names that match no stakeholder

    @model_validator(mode="after")
    def _validate_report_settings(self) -> "Settings":
        if self.REPORT_MIN_STAKEHOLDERS < 1:
            print(  # noqa: T201
                "FATAL: REPORT_MIN_STAKEHOLDERS must be at least 1.",
                file=sys.stderr,
            )
            sys.exit(1)
        if self.APP_ENV == "production" and not self.SENTRY_DSN:
            import warnings
            warnings.warn(
                "SENTRY_DSN not set in production, errors will be invisible",
                stacklevel=2,
            )
        return self


settings = Settings()
