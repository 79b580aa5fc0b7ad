"""Settings management for Inkwell.

Settings are persisted as JSON in ``_INKWELL_DIR/inkwell-settings.json``.
The file is created with defaults on first launch; users edit it directly
and restart the app to apply changes.
"""

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional

_INKWELL_DIR = Path.home() / ".inkwell"
_DEFAULT_SETTINGS_PATH = _INKWELL_DIR / "inkwell-settings.json"


@dataclass
class Settings:
    """Application settings persisted as JSON.

    Relative paths are resolved from ``_INKWELL_DIR/``. Absolute paths and
    ``~`` expansion are supported.

    Attributes
    ----------
    db_path : str
        Path to the SQLite database holding the library.
    session_length : int
        Default countdown length in minutes (5-60).
    reading_speed : int
        Default typewriter delay per character in milliseconds (20-200).
    accrual_interval : int
        Seconds of running stopwatch per accrued minute of reading time.
    activity_log : str
        Path to the activity log file, or empty string to disable it.
    """

    db_path: str = "data/inkwell.db"
    session_length: int = 25
    reading_speed: int = 100
    accrual_interval: int = 60
    activity_log: str = "data/activity.log"

    def resolve_db_path(self) -> Path:
        """Resolve ``db_path`` to an absolute path.

        Relative paths are resolved from ``_INKWELL_DIR/``.

        Returns
        -------
        Path
            Absolute, resolved path to the database file.
        """
        return _resolve(self.db_path)

    def resolve_activity_log(self) -> Optional[Path]:
        """Resolve ``activity_log`` to an absolute path.

        Returns
        -------
        Path or None
            Absolute path to the activity log, or ``None`` if
            ``activity_log`` is empty.
        """
        if not self.activity_log:
            return None
        return _resolve(self.activity_log)


def _resolve(path_str: str) -> Path:
    p = Path(path_str).expanduser()
    if not p.is_absolute():
        p = _INKWELL_DIR / p
    return p.resolve()


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from a JSON file.

    Creates the default settings file if it does not exist. Unknown keys
    are ignored and missing keys take their defaults.

    Parameters
    ----------
    path : Path, optional
        Path to the settings file. Defaults to
        ``_INKWELL_DIR/inkwell-settings.json``.

    Returns
    -------
    Settings
        Loaded (or default) application settings.
    """
    path = path or _DEFAULT_SETTINGS_PATH
    if not path.exists():
        settings = Settings()
        save_settings(settings, path)
        return settings
    try:
        data = json.loads(path.read_text())
        known = {f.name for f in fields(Settings)}
        return Settings(**{k: v for k, v in data.items() if k in known})
    except (json.JSONDecodeError, AttributeError, TypeError):
        return Settings()


def save_settings(settings: Settings, path: Optional[Path] = None) -> None:
    """Write settings to a JSON file.

    Creates parent directories if they do not exist.

    Parameters
    ----------
    settings : Settings
        The settings to persist.
    path : Path, optional
        Destination file path. Defaults to
        ``_INKWELL_DIR/inkwell-settings.json``.
    """
    path = path or _DEFAULT_SETTINGS_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(settings), indent=2) + "\n")
