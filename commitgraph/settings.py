from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Values are read from process environment and optionally from `.env`.
    Command-line flags take precedence over anything set here.
    """

    density_percent: float = 3.0
    repo_dir: str = "graphrepo"
    git_executable: str = "git"
    git_user_name: str | None = None
    git_user_email: str | None = None
    commit_message: str = "."
    log_level: str = "INFO"
    sentry_dsn: str | None = None
    environment: str = "development"
    release: str | None = None
    sentry_traces_sample_rate: float = 0.1
    max_upload_bytes: int = 1_048_576
    upload_budget_bytes: int = 8_388_608
    upload_budget_window_seconds: int = 60

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
