from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from memorizer.domain.constants import DEFAULT_DISTRACTOR_COUNT, DEFAULT_UPCOMING_WINDOW_HOURS


def _config_files() -> list[Path]:
    # Resolved per call: Path.home() follows $HOME.
    return [
        Path.home() / ".config/memorizer/config.toml",
        Path.home() / ".memorizer.toml",
    ]


class AppConfig(BaseSettings):
    """
    Configuration model for memorizer.
    Supports loading from:
    1. Environment variables (MEMORIZER_*)
    2. Config file (~/.config/memorizer/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="MEMORIZER_",
        extra="ignore",
    )

    # Paths
    deck_path: Path = Field(
        default_factory=lambda: Path.home() / ".local/share/memorizer/deck.yaml"
    )

    # Study settings
    distractor_count: int = Field(default=DEFAULT_DISTRACTOR_COUNT, ge=0)
    quiz_seed: str = "quiz"
    upcoming_window_hours: float = Field(default=DEFAULT_UPCOMING_WINDOW_HOURS, gt=0)

    verbose: int = 1

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # First existing file wins
        toml_file = next((f for f in _config_files() if f.exists()), None)

        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (
            init_settings,
            env_settings,
        )

    @field_validator("deck_path", mode="before")
    @classmethod
    def resolve_deck_path(cls, v: Any) -> Path:
        return Path(v).expanduser().resolve()


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/memorizer/config.toml (if exists)
    3. Environment variables (MEMORIZER_*)
    4. cli_overrides (passed from Typer)
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
