"""Configuration management for fsmviz projects."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

FSMVIZ_DIR = ".fsmviz"
CONFIG_FILE = "config.json"
FORMATS = ("svg", "dot", "mermaid", "html", "plantuml", "json")


@dataclass
class RenderConfig:
    """Default render settings for a project."""

    width: int = 800
    height: int = 600
    format: str = "svg"
    output_dir: str = ""

    def validate(self) -> list[str]:
        """Return a list of validation errors (empty if valid)."""
        errors: list[str] = []
        sizes = (self.width, self.height)
        if not all(isinstance(v, int) and not isinstance(v, bool) for v in sizes):
            errors.append("width and height must be integers")
        elif self.width <= 0 or self.height <= 0:
            errors.append("width and height must be positive")
        if self.format not in FORMATS:
            errors.append(f"format must be one of: {', '.join(FORMATS)}")
        return errors


def _config_path(project_root: Path) -> Path:
    return project_root / FSMVIZ_DIR / CONFIG_FILE


def save_config(config: RenderConfig, project_root: Path) -> Path:
    """Save render config to .fsmviz/config.json. Returns the config path."""
    (project_root / FSMVIZ_DIR).mkdir(parents=True, exist_ok=True)
    path = _config_path(project_root)
    data = {
        "width": config.width,
        "height": config.height,
        "format": config.format,
        "output_dir": config.output_dir,
    }
    path.write_text(json.dumps(data, indent=2) + "\n")
    return path


def load_config(project_root: Path) -> RenderConfig:
    """Load render config from .fsmviz/config.json."""
    path = _config_path(project_root)
    if not path.exists():
        raise FileNotFoundError(f"No config found at {path}")
    data = json.loads(path.read_text())
    config = RenderConfig(
        width=data.get("width", 800),
        height=data.get("height", 600),
        format=data.get("format", "svg"),
        output_dir=data.get("output_dir", ""),
    )
    errors = config.validate()
    if errors:
        raise ValueError(f"Invalid config at {path}: {'; '.join(errors)}")
    return config


def load_config_or_default(project_root: Path) -> RenderConfig:
    """Load the project's config, falling back to defaults when there is none."""
    if not is_initialized(project_root):
        return RenderConfig()
    return load_config(project_root)


def is_initialized(project_root: Path) -> bool:
    """Check if the project has an fsmviz config."""
    return _config_path(project_root).exists()
