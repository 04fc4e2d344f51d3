"""
Reminder Settings - User-tunable record and its flat-file store.

File format is shell-compatible ``KEY=value`` lines:

    # Water Reminder Configuration
    INTERVAL=30
    SOUND_ENABLED=true
    CUSTOM_MESSAGE=""
    ICON_PATH="/usr/share/pixmaps/water-drop.png"

Unknown keys are ignored, missing keys take defaults, and malformed values
fall back to the default for that field with a warning.
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path

import structlog

__all__ = [
    "ConfigStore",
    "ReminderConfig",
    "DEFAULT_ICON_PATH",
    "DEFAULT_INTERVAL",
    "parse_bool",
]

logger = structlog.get_logger(__name__)

DEFAULT_INTERVAL = 30
DEFAULT_ICON_PATH = "/usr/share/pixmaps/water-drop.png"

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


def parse_bool(value: str) -> bool:
    """Parse a boolean setting.

    Raises:
        ValueError: If the value is not a recognised boolean
    """
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"not a boolean: {value!r}")


@dataclass(frozen=True)
class ReminderConfig:
    """Immutable reminder settings."""

    interval_minutes: int = DEFAULT_INTERVAL
    sound_enabled: bool = True
    custom_message: str = ""
    icon_path: str = DEFAULT_ICON_PATH

    def __post_init__(self) -> None:
        if self.interval_minutes < 1:
            raise ValueError(f"interval must be a positive number of minutes, got {self.interval_minutes}")
        # The settings file holds one value per line
        if "\n" in self.custom_message or "\r" in self.custom_message:
            raise ValueError("custom message must be a single line")
        if not self.icon_path or "${" in self.icon_path:
            raise ValueError(f"icon path must be a non-empty literal path, got {self.icon_path!r}")

    @property
    def interval_seconds(self) -> int:
        return self.interval_minutes * 60


# Settings key -> dataclass field
_KEYS = {
    "INTERVAL": "interval_minutes",
    "SOUND_ENABLED": "sound_enabled",
    "CUSTOM_MESSAGE": "custom_message",
    "ICON_PATH": "icon_path",
}


def _unquote(raw: str) -> str:
    """Strip matching quotes; honour \\" and \\\\ inside double quotes."""
    value = raw.strip()
    if len(value) >= 2 and value[0] == value[-1] == "'":
        return value[1:-1]
    if len(value) >= 2 and value[0] == value[-1] == '"':
        out = []
        chars = iter(value[1:-1])
        for ch in chars:
            if ch == "\\":
                nxt = next(chars, "")
                if nxt in ('"', "\\", "$", "`"):
                    out.append(nxt)
                else:
                    out.append(ch + nxt)
            else:
                out.append(ch)
        return "".join(out)
    return value


def _quote(value: str) -> str:
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("$", "\\$")
        .replace("`", "\\`")
    )
    return f'"{escaped}"'


def parse_settings(text: str) -> ReminderConfig:
    """Parse settings file content into a ReminderConfig.

    Never raises on bad content: each malformed value is replaced by the
    field default.
    """
    defaults = ReminderConfig()
    raw: dict[str, str] = {}

    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        if line.startswith("export "):
            line = line[len("export "):]
        key, _, value = line.partition("=")
        key = key.strip()
        if key in _KEYS:
            raw[_KEYS[key]] = value

    values = {}

    if "interval_minutes" in raw:
        text_value = _unquote(raw["interval_minutes"])
        try:
            interval = int(text_value)
            if interval < 1:
                raise ValueError("non-positive")
            values["interval_minutes"] = interval
        except ValueError:
            logger.warning("config_value_invalid", key="INTERVAL", value=text_value)

    if "sound_enabled" in raw:
        text_value = _unquote(raw["sound_enabled"])
        try:
            values["sound_enabled"] = parse_bool(text_value)
        except ValueError:
            logger.warning("config_value_invalid", key="SOUND_ENABLED", value=text_value)

    if "custom_message" in raw:
        values["custom_message"] = _unquote(raw["custom_message"])

    if "icon_path" in raw:
        text_value = _unquote(raw["icon_path"])
        # Older control scripts wrote an unexpanded shell default here
        if "${" in text_value or not text_value:
            logger.warning("config_value_invalid", key="ICON_PATH", value=text_value)
        else:
            values["icon_path"] = text_value

    return replace(defaults, **values)


def render_settings(cfg: ReminderConfig) -> str:
    """Render a ReminderConfig in settings file format."""
    return "\n".join([
        "# Water Reminder Configuration",
        f"INTERVAL={cfg.interval_minutes}",
        f"SOUND_ENABLED={'true' if cfg.sound_enabled else 'false'}",
        f"CUSTOM_MESSAGE={_quote(cfg.custom_message)}",
        f"ICON_PATH={_quote(cfg.icon_path)}",
        "",
    ])


class ConfigStore:
    """Loads and saves the settings file at a fixed path.

    Example:
        store = ConfigStore("~/.config/water-reminder/config.conf")
        cfg = store.load()
        store.save(dataclasses.replace(cfg, interval_minutes=45))
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path).expanduser()

    def load(self) -> ReminderConfig:
        """Load settings, writing a default file first if none exists."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            cfg = ReminderConfig()
            if self.save(cfg):
                logger.info("config_created", path=str(self.path))
            return cfg
        except OSError as e:
            logger.warning("config_unreadable", path=str(self.path), error=str(e))
            return ReminderConfig()

        return parse_settings(text)

    def save(self, cfg: ReminderConfig) -> bool:
        """Rewrite the whole settings file.

        Returns:
            True if the file was written
        """
        tmp_path = self.path.with_suffix(".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(render_settings(cfg), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error("config_save_failed", path=str(self.path), error=str(e))
            return False

        logger.debug("config_saved", path=str(self.path))
        return True

    def exists(self) -> bool:
        return self.path.exists()
