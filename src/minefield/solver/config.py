"""Minefield engine configuration."""

from dotenv import find_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine the environment file path, or None if not found
ENV_FILE = find_dotenv() or None


class SolverConfig(BaseSettings):
    """Configuration settings for board generation and the solver."""

    mine_density_divisor: int = 5
    """Default mine count is `rows * cols // mine_density_divisor`. Default: 5."""

    max_iterations: int | None = None
    """Maximum number of propagation iterations per solve. If None (default), no limit."""

    report_interval: int = 10
    """Interval (in propagation iterations) at which to report progress. Default: 10."""

    restore_by_default: bool = True
    """Whether `is_solvable_from` restores the board when `restore` is not given. Default: True."""

    search_attempts: int = 1000
    """Number of boards `find_solvable_board` generates before giving up. Default: 1000."""

    model_config = SettingsConfigDict(
        env_prefix="MINEFIELD_",
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )


config = SolverConfig()
