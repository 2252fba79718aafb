"""
Settings management for filepane
"""
import json
from pathlib import Path


class Settings:
    # Class-level cache to share data between instances
    _cached_settings = None
    _cached_file = None
    _cache_file_mtime = None

    DEFAULTS = {
        "sort_column": 0,  # Name column
        "sort_order": 0,   # Ascending
        "show_hidden": True,
        "selection_mode": "multiple",
    }

    def __init__(self, config_dir=None):
        self.config_dir = Path(config_dir) if config_dir else Path.home() / ".config" / "filepane"
        self.config_file = self.config_dir / "settings.json"
        self.settings = self.load_settings()

    def load_settings(self):
        """Load settings from config file with caching"""
        default_settings = dict(self.DEFAULTS)

        if not self.config_file.exists():
            return default_settings

        try:
            current_mtime = self.config_file.stat().st_mtime

            if (Settings._cached_settings is not None and
                    Settings._cached_file == self.config_file and
                    Settings._cache_file_mtime == current_mtime):
                return Settings._cached_settings.copy()

            with open(self.config_file, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
            if isinstance(loaded, dict):
                default_settings.update(loaded)

            Settings._cached_settings = default_settings.copy()
            Settings._cached_file = self.config_file
            Settings._cache_file_mtime = current_mtime
            return default_settings
        except (json.JSONDecodeError, OSError):
            return default_settings

    def save_settings(self):
        """Save current settings to config file"""
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, 'w', encoding='utf-8') as f:
                json.dump(self.settings, f, indent=2)
        except OSError:
            pass  # Silently fail if we can't save
        finally:
            Settings._cached_settings = None
            Settings._cached_file = None
            Settings._cache_file_mtime = None

    def get(self, key, default=None):
        return self.settings.get(key, default)

    def set(self, key, value):
        # Reload first so concurrent instances don't clobber each other
        self.settings = self.load_settings()
        self.settings[key] = value
        self.save_settings()
