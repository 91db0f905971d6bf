from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
import sys

from symbl_client.errors import InvalidInputError
from symbl_client.models import DEFAULT_AUTH_TYPE, Credentials


class ConfigurationError(InvalidInputError):
    pass


@dataclass(frozen=True)
class AppSettings:
    app_id: str
    app_secret: str
    auth_type: str
    base_url: str
    auth_path: str
    timeout_seconds: float
    auth_timeout_seconds: float
    retry_attempts: int
    retry_delay_seconds: float
    log_level: str

    @staticmethod
    def from_env(require_credentials: bool = True) -> "AppSettings":
        _load_dotenv_if_present()

        try:
            timeout_seconds = float(os.getenv("SYMBL_TIMEOUT_SECONDS", "30"))
            auth_timeout_seconds = float(os.getenv("SYMBL_AUTH_TIMEOUT_SECONDS", "5"))
            retry_attempts = int(os.getenv("SYMBL_RETRY_ATTEMPTS", "3"))
            retry_delay_seconds = float(os.getenv("SYMBL_RETRY_DELAY_SECONDS", "2"))
        except ValueError as error:
            raise ConfigurationError(f"Invalid numeric setting: {error}") from error

        settings = AppSettings(
            app_id=os.getenv("APP_ID", "").strip(),
            app_secret=os.getenv("APP_SECRET", "").strip(),
            auth_type=os.getenv("SYMBL_AUTH_TYPE", DEFAULT_AUTH_TYPE).strip(),
            base_url=os.getenv("SYMBL_BASE_URL", "https://api.symbl.ai").rstrip("/"),
            auth_path=os.getenv("SYMBL_AUTH_PATH", "/oauth2/token:generate").strip(),
            timeout_seconds=timeout_seconds,
            auth_timeout_seconds=auth_timeout_seconds,
            retry_attempts=retry_attempts,
            retry_delay_seconds=retry_delay_seconds,
            log_level=os.getenv("SYMBL_LOG_LEVEL", "INFO").strip().upper(),
        )
        settings.validate(require_credentials=require_credentials)
        return settings

    @property
    def auth_url(self) -> str:
        return f"{self.base_url}{self.auth_path}"

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def credentials(self) -> Credentials:
        return Credentials(app_id=self.app_id, app_secret=self.app_secret, auth_type=self.auth_type)

    def validate(self, require_credentials: bool = True) -> None:
        missing = []
        if require_credentials:
            if not self.app_id:
                missing.append("APP_ID")
            if not self.app_secret:
                missing.append("APP_SECRET")
        if not self.base_url:
            missing.append("SYMBL_BASE_URL")

        if missing:
            raise ConfigurationError(
                "Missing required settings: " + ", ".join(missing)
            )

        if not self.auth_path.startswith("/"):
            raise ConfigurationError("SYMBL_AUTH_PATH must start with '/'")

        if self.timeout_seconds <= 0 or self.auth_timeout_seconds <= 0:
            raise ConfigurationError("SYMBL_TIMEOUT_SECONDS and SYMBL_AUTH_TIMEOUT_SECONDS must be greater than 0")

        if self.retry_attempts < 1:
            raise ConfigurationError("SYMBL_RETRY_ATTEMPTS must be 1 or greater")

        if self.retry_delay_seconds < 0:
            raise ConfigurationError("SYMBL_RETRY_DELAY_SECONDS must be 0 or greater")


def _load_dotenv_if_present(file_name: str = ".env") -> None:
    for candidate in _candidate_env_files(file_name):
        _load_env_file(candidate)


def _candidate_env_files(file_name: str) -> list[Path]:
    candidates: list[Path] = []

    explicit = os.getenv("SYMBL_ENV_FILE", "").strip()
    if explicit:
        candidates.append(Path(explicit).expanduser())

    candidates.append(Path.cwd() / file_name)

    if getattr(sys, "frozen", False):
        candidates.append(Path(sys.executable).resolve().parent / file_name)
    else:
        candidates.append(Path(__file__).resolve().parent.parent / file_name)

    unique_candidates: list[Path] = []
    seen: set[str] = set()
    for path in candidates:
        normalized = str(path.resolve()) if path.exists() else str(path)
        if normalized in seen:
            continue
        seen.add(normalized)
        unique_candidates.append(path)
    return unique_candidates


def _load_env_file(path: Path) -> None:
    if not path.exists():
        return

    try:
        with path.open("r", encoding="utf-8") as env_file:
            for raw_line in env_file:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue

                key, value = line.split("=", 1)
                key = key.strip()
                if key.startswith("export "):
                    key = key[len("export "):].strip()
                value = value.strip().strip('"').strip("'")

                if key and key not in os.environ:
                    os.environ[key] = value
    except OSError:
        return
