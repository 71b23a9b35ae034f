"""Application configuration with pydantic-settings + TOML."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict, TomlConfigSettingsSource

from ascent.models.enums import ClipScheme


def _default_config_dir() -> Path:
    return Path.home() / ".ascent"


class GameplaySettings(BaseSettings):
    """Round timer, scoring and hold window parameters."""

    time_max: float = Field(default=3.0, gt=0)
    success_bonus: float = Field(default=1.5, gt=0)
    max_dt: float = Field(default=0.05, gt=0)
    window_size: int = Field(default=12, ge=1)
    max_run: int = Field(default=3, ge=2)
    scroll_base: float = Field(default=110.0, ge=0)
    scroll_burst: float = Field(default=220.0, ge=0)
    burst_seconds: float = Field(default=0.14, ge=0)

    @model_validator(mode="after")
    def _bonus_below_max(self) -> GameplaySettings:
        # A bonus that fills the whole bar would let the player idle forever.
        if self.success_bonus >= self.time_max:
            msg = f"success_bonus ({self.success_bonus}) must be below time_max ({self.time_max})"
            raise ValueError(msg)
        return self


class AnimationSettings(BaseSettings):
    """Clip playback and procedural sheet parameters."""

    fps: int = Field(default=24, gt=0)
    frames_per_clip: int = Field(default=24, ge=2)
    frame_size: int = Field(default=256, ge=32, le=1024)
    scheme: ClipScheme = ClipScheme.CLASSIC


class AssetSettings(BaseSettings):
    """External sprite sheet location; both unset means procedural art."""

    sprite: str | None = None
    manifest: str | None = None
    timeout: float = Field(default=10.0, gt=0)

    @property
    def external(self) -> bool:
        return bool(self.sprite and self.manifest)


class AppConfig(BaseSettings):
    """Root application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ASCENT_",
        env_nested_delimiter="__",
    )

    config_dir: Path = Field(default_factory=_default_config_dir)
    gameplay: GameplaySettings = Field(default_factory=GameplaySettings)
    animation: AnimationSettings = Field(default_factory=AnimationSettings)
    assets: AssetSettings = Field(default_factory=AssetSettings)

    @classmethod
    def settings_customise_sources(cls, settings_cls, **kwargs):  # type: ignore[override]
        toml_path = _default_config_dir() / "config.toml"
        sources = (
            kwargs.get("init_settings"),
            kwargs.get("env_settings"),
        )
        if toml_path.exists():
            sources = (*sources, TomlConfigSettingsSource(settings_cls, toml_file=toml_path))
        return (*sources, kwargs.get("dotenv_settings"), kwargs.get("file_secret_settings"))

    @property
    def best_score_path(self) -> Path:
        return self.config_dir / "best.json"

    def ensure_dirs(self) -> None:
        """Create the config directory if it doesn't exist."""
        self.config_dir.mkdir(parents=True, exist_ok=True)


def load_config() -> AppConfig:
    """Load application config, creating defaults if needed."""
    config = AppConfig()
    config.ensure_dirs()
    return config
