"""
Event classifier UI preferences (platformdirs + JSON).

Persisted items (schema v1):
- identity_col / time_col / metric_col: column names in the tracks data
- last_identity: identity selected when the app was last used
- plot_height_px: height of the time-series plot
- interval_color: fill color of interval bands

Intervals themselves are never written here.

Behavior:
- If config file missing or unreadable -> defaults are used
- If schema_version mismatches -> defaults (or keep loaded if reset_on_version_mismatch=False)
- Unknown keys in loaded JSON are ignored with warnings
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from platformdirs import user_config_dir

from niceevents.utils.logging import get_logger

logger = get_logger(__name__)

# Increment when you make a breaking change to the on-disk JSON schema.
SCHEMA_VERSION: int = 1

MIN_PLOT_HEIGHT_PX = 200
MAX_PLOT_HEIGHT_PX = 2000


@dataclass
class ClassifierConfigData:
    """JSON-serializable config payload."""
    schema_version: int = SCHEMA_VERSION
    identity_col: str = "identity"
    time_col: str = "timestamp"
    metric_col: str = "metric"
    last_identity: Optional[str] = None
    plot_height_px: int = 400
    interval_color: str = "rgba(255, 165, 0, 0.25)"

    def to_json_dict(self) -> Dict[str, Any]:
        return {
            "schema_version": self.schema_version,
            "identity_col": self.identity_col,
            "time_col": self.time_col,
            "metric_col": self.metric_col,
            "last_identity": self.last_identity,
            "plot_height_px": self.plot_height_px,
            "interval_color": self.interval_color,
        }

    @classmethod
    def from_json_dict(cls, d: Dict[str, Any]) -> "ClassifierConfigData":
        """
        Tolerant loader:
        - ignores unknown keys (with a warning)
        - missing or wrongly typed values fall back to defaults
        """
        defaults = cls()
        try:
            schema_version = int(d.get("schema_version", -1))
        except (TypeError, ValueError):
            schema_version = -1

        def _str(key: str, default: str) -> str:
            v = d.get(key, default)
            if not isinstance(v, str) or not v:
                logger.warning(f"'{key}' is not a non-empty string, using default {default!r}")
                return default
            return v

        last_identity = d.get("last_identity")
        if last_identity is not None:
            last_identity = str(last_identity)

        plot_height_px = defaults.plot_height_px
        if "plot_height_px" in d:
            try:
                plot_height_px = int(d["plot_height_px"])
                plot_height_px = max(MIN_PLOT_HEIGHT_PX, min(MAX_PLOT_HEIGHT_PX, plot_height_px))
            except (TypeError, ValueError):
                logger.warning(f"plot_height_px is not an int, using default {defaults.plot_height_px}")
                plot_height_px = defaults.plot_height_px

        known_keys = set(defaults.to_json_dict().keys())
        for key in d.keys():
            if key not in known_keys:
                logger.warning(f"Unknown key '{key}' in classifier config, ignoring")

        return cls(
            schema_version=schema_version,
            identity_col=_str("identity_col", defaults.identity_col),
            time_col=_str("time_col", defaults.time_col),
            metric_col=_str("metric_col", defaults.metric_col),
            last_identity=last_identity,
            plot_height_px=plot_height_px,
            interval_color=_str("interval_color", defaults.interval_color),
        )


class ClassifierConfig:
    """
    Manager for loading/saving ClassifierConfigData to disk.
    """

    def __init__(self, *, path: Path, data: Optional[ClassifierConfigData] = None):
        self.path = path
        self.data = data if data is not None else ClassifierConfigData()

    @staticmethod
    def default_config_path(
        app_name: str = "niceevents",
        filename: str = "event_classifier_config.json",
        app_author: str | None = None,
    ) -> Path:
        """
        Determine OS-appropriate per-user config path.

        macOS:   ~/Library/Application Support/niceevents/event_classifier_config.json
        Linux:   ~/.config/niceevents/event_classifier_config.json
        Windows: %APPDATA%\\niceevents\\event_classifier_config.json
        """
        return Path(user_config_dir(app_name, app_author)) / filename

    @classmethod
    def load(
        cls,
        *,
        config_path: Optional[Path] = None,
        app_name: str = "niceevents",
        filename: str = "event_classifier_config.json",
        app_author: str | None = None,
        schema_version: int = SCHEMA_VERSION,
        reset_on_version_mismatch: bool = True,
    ) -> "ClassifierConfig":
        """
        Load config from disk.

        If file doesn't exist or is unreadable -> defaults.
        If schema mismatch:
          - reset_on_version_mismatch=True -> defaults
          - else -> keep loaded but overwrite schema_version
        """
        path = config_path or cls.default_config_path(app_name=app_name, filename=filename, app_author=app_author)
        default_data = ClassifierConfigData(schema_version=schema_version)

        try:
            parsed = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.debug(f"Classifier config file not found at {path}, using defaults")
            return cls(path=path, data=default_data)
        except json.JSONDecodeError as e:
            logger.warning(f"Classifier config file at {path} is not valid JSON: {e}, using defaults")
            return cls(path=path, data=default_data)
        except OSError as e:
            logger.warning(f"Error reading classifier config from {path}: {e}, using defaults")
            return cls(path=path, data=default_data)

        if not isinstance(parsed, dict):
            logger.warning(f"Classifier config file at {path} does not contain a dict, using defaults")
            return cls(path=path, data=default_data)

        loaded = ClassifierConfigData.from_json_dict(parsed)
        if loaded.schema_version != schema_version:
            if reset_on_version_mismatch:
                logger.warning(
                    f"Classifier config schema version mismatch: loaded={loaded.schema_version}, "
                    f"expected={schema_version}, resetting to defaults"
                )
                return cls(path=path, data=default_data)
            loaded.schema_version = schema_version
        return cls(path=path, data=loaded)

    def save(self) -> None:
        """Write config to disk."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self.data.to_json_dict(), indent=2), encoding="utf-8")
            logger.info(f"Saved classifier config to {self.path}")
        except OSError as e:
            logger.error(f"Error saving classifier config to {self.path}: {e}")
            raise

    def get_last_identity(self) -> Optional[str]:
        return self.data.last_identity

    def set_last_identity(self, identity: Optional[str]) -> None:
        self.data.last_identity = identity

    def get_plot_height_px(self) -> int:
        return self.data.plot_height_px

    def set_plot_height_px(self, value: int) -> None:
        self.data.plot_height_px = max(MIN_PLOT_HEIGHT_PX, min(MAX_PLOT_HEIGHT_PX, int(value)))
