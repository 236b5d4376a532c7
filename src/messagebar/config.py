import os
import enum
import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from dotenv import find_dotenv, load_dotenv

from messagebar.errors import ConfigError
from messagebar.ui.theme import Theme

log = logging.getLogger("messagebar.config")

# Shipped inside the package so installed copies find it too
DEFAULT_CONFIG_PATH = Path(__file__).resolve().with_name("default.yaml")


class MessageBarPosition(enum.Enum):
    TOP = "top"
    BOTTOM = "bottom"

    @classmethod
    def parse(cls, value) -> "MessageBarPosition":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigError(f"position must be 'top' or 'bottom', got {value!r}") from None


@dataclass
class MessageBarConfig:
    """Host-supplied settings. Everything but the timing is passed through
    to the renderer untouched."""

    visibility_duration_ms: int = 3000
    position: MessageBarPosition = MessageBarPosition.TOP
    error_max_lines: int = 1
    success_max_lines: int = 1
    show_confirmation_on_copy: bool = False
    confirmation_duration_ms: int = 2000
    vertical_padding: int = 12
    horizontal_padding: int = 12
    theme: Theme = field(default_factory=Theme)

    def __post_init__(self):
        self.position = MessageBarPosition.parse(self.position)
        for name in ("visibility_duration_ms", "confirmation_duration_ms"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive, got {getattr(self, name)}")
        for name in ("error_max_lines", "success_max_lines"):
            if getattr(self, name) < 1:
                raise ConfigError(f"{name} must be at least 1, got {getattr(self, name)}")
        for name in ("vertical_padding", "horizontal_padding"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must not be negative, got {getattr(self, name)}")

    @classmethod
    def from_dict(cls, data: dict) -> "MessageBarConfig":
        data = dict(data or {})
        theme = Theme.from_dict(data.pop("theme", None) or {})
        known = set(cls.__dataclass_fields__) - {"theme"}
        unknown = set(data) - known
        if unknown:
            log.warning("Ignoring unknown message bar settings: %s", ", ".join(sorted(unknown)))
        kwargs = {k: v for k, v in data.items() if k in known}
        for name in ("visibility_duration_ms", "confirmation_duration_ms",
                     "error_max_lines", "success_max_lines",
                     "vertical_padding", "horizontal_padding"):
            if name in kwargs:
                kwargs[name] = _to_int(name, kwargs[name])
        if "show_confirmation_on_copy" in kwargs:
            kwargs["show_confirmation_on_copy"] = _to_bool(kwargs["show_confirmation_on_copy"])
        return cls(theme=theme, **kwargs)


def _to_int(name: str, value) -> int:
    # YAML turns `true` into a bool and `1500.5` into a float
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ConfigError(f"{name} must be a whole number, got {value!r}")
        return int(value)
    try:
        return int(str(value).strip())
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None


def _to_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off", ""):
        return False
    raise ConfigError(f"Expected a boolean, got {value!r}")


def load_config(config_path: str = None) -> MessageBarConfig:
    """Load configuration from YAML file with .env overrides."""
    # .env is looked up from the working directory, not the install location
    load_dotenv(find_dotenv(usecwd=True))

    yaml_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    if not yaml_path.exists():
        log.warning("Config file not found: %s, using defaults", yaml_path)
        raw = {}
    else:
        with open(yaml_path) as f:
            raw = yaml.safe_load(f) or {}

    bar = dict(raw.get("message_bar") or {})
    if "theme" in raw and "theme" not in bar:
        bar["theme"] = raw["theme"]

    # Environment variable overrides
    overrides = {
        "visibility_duration_ms": "MESSAGEBAR_VISIBILITY_MS",
        "position": "MESSAGEBAR_POSITION",
        "error_max_lines": "MESSAGEBAR_ERROR_MAX_LINES",
        "success_max_lines": "MESSAGEBAR_SUCCESS_MAX_LINES",
        "show_confirmation_on_copy": "MESSAGEBAR_SHOW_CONFIRMATION",
    }
    for key, env_name in overrides.items():
        if env_name in os.environ:
            bar[key] = os.environ[env_name]

    config = MessageBarConfig.from_dict(bar)
    log.info(
        "Config loaded: %s bar, hide after %d ms, copy confirmation %s",
        config.position.value,
        config.visibility_duration_ms,
        "on" if config.show_confirmation_on_copy else "off",
    )
    return config
