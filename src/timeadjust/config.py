from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import tomllib

from .parser import explain, parse
from .timeutils import resolve_timezone


def _default_config_root() -> Path:
    return Path.home() / ".config" / "timeadjust"


def _default_config_path() -> Path:
    return _default_config_root() / "config.toml"


DEFAULT_PRESETS = {
    "tomorrow": "+1d @0s0m0h",
    "next_week": "+1w",
    "end_of_day": "@59s59m23h",
}


@dataclass(slots=True)
class DisplaySettings:
    timezone: str = ""
    output_format: str = "iso"


@dataclass(slots=True)
class TimeAdjustConfig:
    display: DisplaySettings = field(default_factory=DisplaySettings)
    presets: dict[str, str] = field(default_factory=dict)

    @classmethod
    def default(cls) -> "TimeAdjustConfig":
        return cls(display=DisplaySettings(), presets=dict(DEFAULT_PRESETS))

    def preset(self, name: str) -> str:
        expression = self.presets.get(name)
        if expression is None:
            raise KeyError(f"Preset '{name}' not found")
        return expression

    def preset_names(self) -> list[str]:
        return sorted(self.presets)

    def to_dict(self) -> dict:
        return {
            "display": {
                "timezone": self.display.timezone,
                "output_format": self.display.output_format,
            },
            "presets": dict(self.presets),
        }


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class ConfigManager:
    """Simple TOML configuration loader."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path = config_path or _default_config_path()
        self._errors: list[str] = []

    def errors(self) -> list[str]:
        return list(self._errors)

    def load(self) -> TimeAdjustConfig:
        self._errors.clear()
        if not self.config_path.exists():
            config = TimeAdjustConfig.default()
            self._write(config)
            return config

        try:
            with self.config_path.open("rb") as handle:
                raw = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            self._errors.append(f"Could not read {self.config_path}: {exc}")
            return TimeAdjustConfig.default()

        display_cfg = raw.get("display", {})
        if not isinstance(display_cfg, dict):
            self._errors.append("Invalid [display]: expected a table")
            display_cfg = {}
        timezone_name = str(display_cfg.get("timezone", "") or "")
        try:
            resolve_timezone(timezone_name)
        except ValueError as exc:
            self._errors.append(f"Invalid display.timezone: {exc}")
            timezone_name = ""

        output_format = str(display_cfg.get("output_format", "iso") or "iso")

        presets_cfg = raw.get("presets", {})
        if not isinstance(presets_cfg, dict):
            self._errors.append("Invalid [presets]: expected a table")
            presets_cfg = dict(DEFAULT_PRESETS)

        presets: dict[str, str] = {}
        for name, expression in presets_cfg.items():
            if not isinstance(expression, str) or parse(expression) is None:
                issues = explain(expression) if isinstance(expression, str) else ["not a string"]
                self._errors.append(f"Invalid preset '{name}': {'; '.join(issues)}")
                continue
            presets[name] = expression

        return TimeAdjustConfig(
            display=DisplaySettings(timezone=timezone_name, output_format=output_format),
            presets=presets,
        )

    def _write(self, config: TimeAdjustConfig) -> None:
        data = config.to_dict()
        lines = [
            "[display]",
            f"timezone = {_quote(data['display']['timezone'])}",
            f"output_format = {_quote(data['display']['output_format'])}",
            "",
            "[presets]",
        ]
        for name, expression in sorted(data["presets"].items()):
            lines.append(f"{_quote(name)} = {_quote(expression)}")
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    def save(self, config: TimeAdjustConfig) -> None:
        self._write(config)
