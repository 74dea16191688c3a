"""Environment-driven settings, read once by config/settings.py.

Every variable takes the ``EVENTS_`` prefix, e.g. ``EVENTS_DB_ENGINE=postgres``.
Values may also come from a ``.env`` file next to manage.py.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent


class EnvSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="EVENTS_",
        env_file=BASE_DIR / ".env",
        extra="ignore",
    )

    secret_key: str = "django-insecure-local-development-key"
    debug: bool = False
    allowed_hosts: str = "localhost,127.0.0.1"

    db_engine: Literal["sqlite", "postgres"] = "sqlite"
    db_name: str = "events.sqlite3"
    db_user: str = ""
    db_password: str = ""
    db_host: str = "localhost"
    db_port: int = 5432

    log_level: str = "INFO"
    default_page_size: int = Field(default=25, ge=1)
    max_page_size: int = Field(default=100, ge=1)

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def allowed_host_list(self) -> list[str]:
        return [host.strip() for host in self.allowed_hosts.split(",") if host.strip()]

    def database(self) -> dict[str, Any]:
        """Return the Django DATABASES["default"] entry."""
        if self.db_engine == "postgres":
            return {
                "ENGINE": "django.db.backends.postgresql",
                "NAME": self.db_name,
                "USER": self.db_user,
                "PASSWORD": self.db_password,
                "HOST": self.db_host,
                "PORT": self.db_port,
            }
        return {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / self.db_name,
        }
