from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from diffreview.constants import (
    DEFAULT_EXCLUDE_PATHS,
    DEFAULT_MODEL,
    DEFAULT_REPORT_FILENAME,
    MAX_OUTPUT_TOKENS,
    PROJECT_CONFIG_FILENAME,
)
from diffreview.exceptions import ConfigError
from diffreview.logging import get_logger

__all__ = [
    "DiffReviewConfig",
    "ModelConfig",
    "ReviewConfig",
    "load_config",
    "get_user_config_path",
]

logger = get_logger(__name__)


class ModelConfig(BaseModel):
    """Settings for Claude model selection.

    Attributes:
        model_id: Claude model identifier.
        max_tokens: Maximum OUTPUT tokens per response.
        temperature: Sampling temperature (0.0 = deterministic).
    """

    model_id: str = DEFAULT_MODEL
    max_tokens: int = Field(default=MAX_OUTPUT_TOKENS, gt=0, le=200000)
    temperature: float = Field(default=0.0, ge=0.0, le=1.0)


class ReviewConfig(BaseModel):
    """Settings for the review and metrics commands.

    Attributes:
        exclude_paths: Path literals skipped before their diff is fetched.
        report_filename: Markdown report filename, relative to the reviewed
            directory.
        commit_message: Ask the agent for a conventional commit message.
        write_report: Ask the agent to save the review as markdown.
    """

    exclude_paths: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDE_PATHS)
    )
    report_filename: str = DEFAULT_REPORT_FILENAME
    commit_message: bool = True
    write_report: bool = True

    @field_validator("report_filename")
    @classmethod
    def check_report_filename(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("report_filename must be non-empty")
        return v


class YamlConfigSource(PydanticBaseSettingsSource):
    """Settings source that loads from a YAML file."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | None = None,
    ):
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._config_data: dict[str, Any] = {}
        if yaml_file and yaml_file.exists():
            try:
                with open(yaml_file) as f:
                    loaded = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(
                    message=f"Invalid YAML in {yaml_file}: {e}",
                    field=None,
                    value=None,
                ) from e
            if loaded is None:
                logger.warning("config_file_empty", path=str(yaml_file))
            elif not isinstance(loaded, dict):
                raise ConfigError(
                    message=f"Config file {yaml_file} must contain a mapping",
                    field=None,
                    value=type(loaded).__name__,
                )
            else:
                self._config_data = loaded

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        if field_name in self._config_data:
            return self._config_data[field_name], field_name, False
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        return self._config_data


class DiffReviewConfig(BaseSettings):
    """Root configuration object containing all diffreview settings."""

    model_config = SettingsConfigDict(
        env_prefix="DIFFREVIEW_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    model: ModelConfig = Field(default_factory=ModelConfig)
    review: ReviewConfig = Field(default_factory=ReviewConfig)
    verbosity: Literal["error", "warning", "info", "debug"] = "warning"

    # Set by load_config() before instantiation; read by the sources hook
    project_config_path: ClassVar[Path | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Order settings sources, highest priority first.

        1. Init kwargs (tests, programmatic overrides)
        2. Environment variables (DIFFREVIEW_*)
        3. Project YAML config (./diffreview.yaml or --config path)
        4. User YAML config (~/.config/diffreview/config.yaml)
        """
        project_config_path = (
            cls.project_config_path or Path.cwd() / PROJECT_CONFIG_FILENAME
        )
        return (
            init_settings,
            env_settings,
            YamlConfigSource(settings_cls, project_config_path),
            YamlConfigSource(settings_cls, get_user_config_path()),
        )


def get_user_config_path() -> Path:
    """Get the path to the user configuration file.

    Returns:
        Path to ~/.config/diffreview/config.yaml
    """
    return Path.home() / ".config" / "diffreview" / "config.yaml"


def load_config(config_path: Path | None = None) -> DiffReviewConfig:
    """Load configuration with hierarchy: defaults -> user -> project -> env.

    Args:
        config_path: Optional path to the project config file. Defaults to
            ./diffreview.yaml

    Returns:
        DiffReviewConfig with merged configuration.

    Raises:
        ConfigError: If configuration is invalid.
    """
    if config_path is None:
        config_path = Path.cwd() / PROJECT_CONFIG_FILENAME

    if not config_path.exists():
        logger.info("no_project_config", path=str(config_path))

    DiffReviewConfig.project_config_path = config_path
    try:
        return DiffReviewConfig()
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        raise ConfigError(
            message=f"Invalid configuration: {first_error['msg']}",
            field=field,
            value=first_error.get("input"),
        ) from e
    finally:
        DiffReviewConfig.project_config_path = None
