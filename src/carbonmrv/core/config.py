from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# .env file sits in the project root (parent of src/)
# Only use if it exists (CI uses environment variables directly)
# Path: core/config.py -> carbonmrv -> src -> project root -> .env
_ENV_FILE = Path(__file__).parent.parent.parent.parent / ".env"
_ENV_FILE = _ENV_FILE if _ENV_FILE.exists() else None


@lru_cache
def get_output_dir() -> Path:
    """Get the report output directory (reports/ in workspace root).

    Looks for project root by finding a .git directory or pyproject.toml,
    then returns reports/ within that root.
    """
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / ".git").exists() or (parent / "pyproject.toml").exists():
            output_dir = parent / "reports"
            output_dir.mkdir(exist_ok=True)
            return output_dir
    # Fallback to current working directory
    output_dir = Path.cwd() / "reports"
    output_dir.mkdir(exist_ok=True)
    return output_dir


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Managed backend (hosted Postgres behind a PostgREST-style API)
    backend_url: str | None = None
    backend_anon_key: str | None = None
    # Service key bypasses row-level security; only needed for verifier exports
    backend_service_key: str | None = None
    request_timeout: float = 30.0

    # Raise on unrecognized crop types / water practices instead of defaulting
    strict_estimation: bool = False

    # Simulated latency of the remote-sensing collaborator (seconds)
    remote_sensing_delay_seconds: float = 0.0

    # UI language for labels and report headings
    ui_language: Literal["en", "hi"] = "en"

    # Display units for CLI output ("metric" = hectares, "imperial" = acres)
    # Note: the backend always stores hectares
    display_units: Literal["imperial", "metric"] = "metric"

    log_level: str = "WARNING"


settings = Settings()
