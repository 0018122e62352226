"""
Dedup settings and their persistence.

The embedding application keeps one JSON config file holding many unrelated
keys (save path, tray behaviour, ...). Only ``enable_image_dedup`` and
``dedup_threshold`` belong to this package; everything else is preserved
untouched when settings are written back.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .logging import get_logger

logger = get_logger(__name__)

FINGERPRINT_BITS = 64


class ConfigError(ValueError):
    """Raised when dedup settings are invalid or cannot be parsed."""


@dataclass
class Settings:
    enable_image_dedup: bool = True
    dedup_threshold: int = 8
    max_workers: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.enable_image_dedup, bool):
            raise ConfigError(f"enable_image_dedup must be a boolean, got {self.enable_image_dedup!r}")
        # bool is an int subclass; reject it explicitly
        if isinstance(self.dedup_threshold, bool) or not isinstance(self.dedup_threshold, int):
            raise ConfigError(f"dedup_threshold must be an integer, got {self.dedup_threshold!r}")
        if self.dedup_threshold < 0:
            raise ConfigError(f"dedup_threshold must be non-negative, got {self.dedup_threshold}")
        if self.dedup_threshold > FINGERPRINT_BITS:
            logger.info(
                f"dedup_threshold {self.dedup_threshold} exceeds the {FINGERPRINT_BITS}-bit fingerprint; "
                "every comparable pair will be treated as similar"
            )
        if self.max_workers is not None and (
            isinstance(self.max_workers, bool) or not isinstance(self.max_workers, int) or self.max_workers < 1
        ):
            raise ConfigError(f"max_workers must be a positive integer or None, got {self.max_workers!r}")

    def to_dict(self) -> Dict[str, Any]:
        """Keys as they appear in the persisted application config."""
        return {
            "enable_image_dedup": self.enable_image_dedup,
            "dedup_threshold": self.dedup_threshold,
        }


def _read_config_file(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Config file {config_path} is not valid UTF-8 JSON: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a JSON object")
    return data


def load_settings(config_path: Path) -> Settings:
    """
    Load dedup settings from the application's JSON config file.

    Unknown keys are ignored. A missing file yields default settings.

    Raises:
        ConfigError: If the file is not a JSON object or holds invalid values
    """
    config_path = Path(config_path)
    if not config_path.exists():
        logger.info(f"No config file at {config_path}, using defaults")
        return Settings()

    data = _read_config_file(config_path)
    defaults = Settings()
    settings = Settings(
        enable_image_dedup=data.get("enable_image_dedup", defaults.enable_image_dedup),
        dedup_threshold=data.get("dedup_threshold", defaults.dedup_threshold),
    )
    logger.debug(f"Loaded settings from {config_path}: {settings}")
    return settings


def save_settings(settings: Settings, config_path: Path) -> Path:
    """Merge dedup settings into the config file, keeping every other key."""
    config_path = Path(config_path)
    data: Dict[str, Any] = {}
    if config_path.exists():
        data = _read_config_file(config_path)

    data.update(settings.to_dict())
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)

    logger.info(f"Saved dedup settings to {config_path}")
    return config_path
