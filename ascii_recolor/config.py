"""
JSON configuration for ascii-recolor.

A config file stores the choices a user would otherwise pass on every run:

    {
      "preset": "transgender",
      "mode": "rgb",
      "light_dark": "dark",
      "color_align": {"mode": "custom", "custom_colors": {"1": 0, "2": 1}},
      "backend": "neofetch",
      "args": ["--off"],
      "distro": null
    }

Fore/back pairs are never stored; they are looked up from the distro at run
time.
"""

from __future__ import annotations

import json
import logging
import shlex
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from .alignment import ColorAlignment, Custom, Horizontal, Vertical
from .backend import Backend
from .color_profile import AnsiMode, ProfilePreset, TerminalTheme
from .errors import RecolorError, ValidationError

__all__ = [
    "AlignmentConfig",
    "Config",
    "CustomAlignConfig",
    "HorizontalAlignConfig",
    "VerticalAlignConfig",
    "alignment_config",
    "alignment_from_dict",
    "alignment_to_dict",
    "config_from_dict",
    "config_to_dict",
    "load_config",
    "save_config",
]

logger = logging.getLogger(__name__)


# =============================================================================
# ALIGNMENT MODELS
# =============================================================================


class HorizontalAlignConfig(BaseModel):
    """Stored form of a Horizontal alignment."""

    mode: Literal["horizontal"] = "horizontal"

    model_config = ConfigDict(extra="ignore", frozen=True)

    def to_alignment(self) -> Horizontal:
        return Horizontal()


class VerticalAlignConfig(BaseModel):
    """Stored form of a Vertical alignment."""

    mode: Literal["vertical"] = "vertical"

    model_config = ConfigDict(extra="ignore", frozen=True)

    def to_alignment(self) -> Vertical:
        return Vertical()


class CustomAlignConfig(BaseModel):
    """Stored form of a Custom alignment. JSON keys are slot numbers as strings."""

    mode: Literal["custom"] = "custom"
    custom_colors: dict[int, int] = Field(
        default_factory=dict, description="Slot (1-6) to palette index (0-based)"
    )

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("custom_colors")
    @classmethod
    def _check_custom_colors(cls, value: dict[int, int]) -> dict[int, int]:
        try:
            Custom(value)
        except RecolorError as e:
            raise ValueError(str(e)) from e
        return value

    def to_alignment(self) -> Custom:
        return Custom(self.custom_colors)


AlignmentConfig = Annotated[
    HorizontalAlignConfig | VerticalAlignConfig | CustomAlignConfig,
    Field(discriminator="mode"),
]

_ALIGNMENT_ADAPTER: TypeAdapter[AlignmentConfig] = TypeAdapter(AlignmentConfig)


def alignment_config(
    alignment: ColorAlignment,
) -> HorizontalAlignConfig | VerticalAlignConfig | CustomAlignConfig:
    """Stored form of an alignment (fore/back pairs are dropped)."""
    if isinstance(alignment, Custom):
        return CustomAlignConfig(custom_colors=dict(alignment.colors))
    if isinstance(alignment, Vertical):
        return VerticalAlignConfig()
    return HorizontalAlignConfig()


# =============================================================================
# CONFIG MODEL
# =============================================================================


class Config(BaseModel):
    """
    User configuration.

    Unknown keys are ignored so newer config files still load.

    Attributes:
        preset: Name of a ProfilePreset, lowercase
        mode: 8-bit or 24-bit escapes
        light_dark: Terminal theme
        color_align: Stored alignment, see ``alignment`` for the runtime value
        backend: Fetch tool used to print the art
        args: Extra arguments passed through to the backend
        distro: Distro override, None for the running system
    """

    preset: str = Field(default="rainbow", description="Color profile preset name")
    mode: AnsiMode = AnsiMode.RGB
    light_dark: TerminalTheme = TerminalTheme.DARK
    color_align: AlignmentConfig = Field(default_factory=HorizontalAlignConfig)
    backend: Backend = Backend.NEOFETCH
    args: tuple[str, ...] = ()
    distro: str | None = None

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("preset")
    @classmethod
    def _check_preset(cls, value: str) -> str:
        if value.upper() not in ProfilePreset.__members__:
            msg = f"Unknown preset: {value!r}"
            raise ValueError(msg)
        return value.lower()

    @field_validator("color_align", mode="before")
    @classmethod
    def _from_alignment(cls, value: Any) -> Any:
        if isinstance(value, (Horizontal, Vertical, Custom)):
            return alignment_config(value)
        return value

    @field_validator("args", mode="before")
    @classmethod
    def _split_args(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            return shlex.split(value)
        return value

    @property
    def alignment(self) -> ColorAlignment:
        return self.color_align.to_alignment()

    @property
    def profile_preset(self) -> ProfilePreset:
        return ProfilePreset[self.preset.upper()]


def _to_validation_error(e: PydanticValidationError, what: str) -> ValidationError:
    details = "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or what}: {err['msg']}"
        for err in e.errors()
    )
    return ValidationError(f"Invalid {what}: {details}")


# =============================================================================
# SERIALIZATION
# =============================================================================


def alignment_from_dict(data: Mapping[str, Any]) -> ColorAlignment:
    """
    Build an alignment from its config representation.

    Raises:
        ValidationError: If the mode is unknown or custom colors are malformed
    """
    try:
        return _ALIGNMENT_ADAPTER.validate_python(data).to_alignment()
    except PydanticValidationError as e:
        raise _to_validation_error(e, "color_align") from e


def alignment_to_dict(alignment: ColorAlignment) -> dict[str, Any]:
    """Config representation of an alignment (fore/back pairs are dropped)."""
    return alignment_config(alignment).model_dump(mode="json")


def config_from_dict(data: Mapping[str, Any]) -> Config:
    """
    Validate a parsed config object.

    Missing keys fall back to the Config defaults.

    Raises:
        ValidationError: If any value is invalid, the message names the key
    """
    try:
        return Config.model_validate(data)
    except PydanticValidationError as e:
        raise _to_validation_error(e, "config") from e


def config_to_dict(config: Config) -> dict[str, Any]:
    return config.model_dump(mode="json")


def load_config(path: Path) -> Config:
    """
    Read and validate a JSON config file.

    Raises:
        ValidationError: If the file cannot be read or holds invalid values
    """
    logger.debug("Loading config from %s", path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ValidationError(f"Cannot read config file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ValidationError(f"Config file {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ValidationError(f"Config file {path} must contain a JSON object")
    return config_from_dict(data)


def save_config(config: Config, path: Path) -> None:
    """
    Write config as indented JSON, creating parent directories.

    Raises:
        ValidationError: If the file cannot be written
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(config_to_dict(config), indent=4) + "\n", encoding="utf-8")
    except OSError as e:
        raise ValidationError(f"Cannot write config file {path}: {e}") from e
    logger.info("Config written to %s", path)
