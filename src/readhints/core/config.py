"""User configuration for the readhints command line."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import yaml

from readhints.core.batch import ON_ERROR_POLICIES
from readhints.core.scanner import MAX_NAME_LENGTH_DEFAULT

MODES = ("point", "interval")


class ConfigError(Exception):
    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


@dataclass(frozen=True)
class HintConfig:
    mode: str = "point"
    on_error: str = "skip"
    max_name_length: int = MAX_NAME_LENGTH_DEFAULT
    references: Path | None = None

    @property
    def interval(self) -> bool:
        return self.mode == "interval"


def get_user_config_path() -> Path:
    """Config file location: $READHINTS_CONFIG, else the per-user config dir.

    The per-user dir is %APPDATA% on Windows and $XDG_CONFIG_HOME (default
    ~/.config) elsewhere.
    """
    override = os.environ.get("READHINTS_CONFIG")
    if override:
        return Path(override).expanduser()
    var, fallback = ("APPDATA", "~") if os.name == "nt" else ("XDG_CONFIG_HOME", "~/.config")
    root = os.environ.get(var) or os.path.expanduser(fallback)
    return Path(root) / "readhints" / "config.yaml"


def load_config(text: str, *, base_dir: Path | None = None) -> HintConfig:
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError([f"YAML parse error: {e}"]) from None

    if not isinstance(data, dict):
        raise ConfigError(["Top-level YAML must be a mapping."])

    errors: list[str] = []
    known = {"mode", "on_error", "max_name_length", "references"}
    for key in data:
        if key not in known:
            errors.append(f"unknown key: {key}")

    mode = data.get("mode", "point")
    if mode not in MODES:
        errors.append("mode must be 'point' or 'interval'")

    on_error = data.get("on_error", "skip")
    if on_error not in ON_ERROR_POLICIES:
        errors.append("on_error must be 'skip' or 'abort'")

    max_name_length = data.get("max_name_length", MAX_NAME_LENGTH_DEFAULT)
    if (
        not isinstance(max_name_length, int)
        or isinstance(max_name_length, bool)
        or max_name_length <= 0
    ):
        errors.append("max_name_length must be a positive integer")

    references = data.get("references")
    ref_path: Path | None = None
    if references is not None:
        if not isinstance(references, str) or not references:
            errors.append("references must be a path string")
        else:
            ref_path = Path(references).expanduser()
            if not ref_path.is_absolute() and base_dir is not None:
                ref_path = base_dir / ref_path

    if errors:
        raise ConfigError(errors)

    return HintConfig(
        mode=mode,
        on_error=on_error,
        max_name_length=max_name_length,
        references=ref_path,
    )


def load_config_file(path: str | Path) -> HintConfig:
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {path}") from None
    return load_config(text, base_dir=p.parent)


def load_user_config() -> HintConfig:
    """Load the user config, or defaults when none exists."""
    path = get_user_config_path()
    if not path.exists():
        return HintConfig()
    return load_config_file(path)
