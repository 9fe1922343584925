"""Configuration for dirlens with validation."""

from pathlib import Path
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
import structlog
import toml

from dirlens.errors import ConfigError

log = structlog.get_logger()


DEFAULT_EXCLUDE_DIRS = [
    ".git",
    ".hg",
    ".svn",
    "node_modules",
    "__pycache__",
    ".venv",
    "venv",
    ".tox",
    ".mypy_cache",
    ".pytest_cache",
    ".next",
    ".nuxt",
    "dist",
    "build",
    "coverage",
]


class DirlensConfig(BaseModel):
    """Main configuration for dirlens with validation."""

    model_config = ConfigDict(validate_assignment=True)

    # Output
    locale: str = Field(default="en", pattern="^(en|zh)$")

    # Sampling bounds
    content_sample_size: int = Field(gt=0, default=10)
    dependency_confirm_sample: int = Field(gt=0, default=5)
    max_read_bytes: int = Field(gt=0, default=65536)

    # Share of a directory's files a type needs to count as primary
    primary_type_threshold: float = Field(gt=0, le=1, default=0.2)

    # File collection
    exclude_dirs: List[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE_DIRS))

    # Logging
    log_level: str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR)$")
    log_file: Optional[Path] = None
    json_logs: bool = False

    @field_validator("exclude_dirs")
    @classmethod
    def strip_exclude_dirs(cls, v):
        return [d.strip().rstrip("/") for d in v if d and d.strip()]

    @classmethod
    def load(cls, path: Optional[str] = None, strict: bool = False) -> "DirlensConfig":
        """Load configuration from TOML file.

        Search order if path not provided:
        1. ./dirlens.toml (project-specific)
        2. ~/.dirlens/config.toml (user default)

        Args:
            path: Optional explicit config file path
            strict: Raise ConfigError instead of falling back to defaults

        Returns:
            DirlensConfig instance
        """
        if path is None:
            candidates = [
                Path("dirlens.toml"),
                Path("~/.dirlens/config.toml").expanduser(),
            ]
            for candidate in candidates:
                if candidate.exists():
                    path = str(candidate)
                    log.info("config_found", path=path)
                    break
        elif strict and not Path(path).exists():
            raise ConfigError(f"Config file not found: {path}")

        if path and Path(path).exists():
            try:
                data = toml.load(path)
                config = cls(**data)
                log.info("config_loaded", path=path)
                return config
            except Exception as e:
                if strict:
                    raise ConfigError(f"Invalid config file {path}: {e}") from e
                log.error("config_load_failed", path=path, error=str(e))
                return cls()

        log.info("config_using_defaults")
        return cls()

    def save(self, path: str):
        """Save configuration to TOML file.

        Args:
            path: File path to save to
        """
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            data = self.model_dump(mode="json", exclude_none=True)
            toml.dump(data, f)
        log.info("config_saved", path=path)


def validate_config(config: DirlensConfig) -> List[str]:
    """Validate configuration and return warnings.

    Args:
        config: Config to validate

    Returns:
        List of warning messages
    """
    warnings = []

    if config.content_sample_size < 3:
        warnings.append(
            f"content_sample_size={config.content_sample_size} is very small; "
            "content analysis may miss directory roles"
        )

    if config.max_read_bytes < 1024:
        warnings.append(
            f"max_read_bytes={config.max_read_bytes} only covers the first lines of each file"
        )

    if config.primary_type_threshold > 0.5:
        warnings.append(
            f"primary_type_threshold={config.primary_type_threshold} allows at most one primary file type"
        )

    if config.log_file:
        log_dir = Path(config.log_file).expanduser().parent
        if log_dir.exists() and not log_dir.is_dir():
            warnings.append(f"Log file directory is not a directory: {log_dir}")

    return warnings
