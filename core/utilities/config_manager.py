# core/utilities/config_manager.py
import json
import logging
from config import PathConfig

logger = logging.getLogger(__name__)

class ConfigManager:
    LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')

    DEFAULT_SETTINGS = {
        'comic_count': None,       # None = ask xkcd.com for the latest number
        'request_timeout': 10,     # Seconds per HTTP request
        'compression_level': 10,   # Zstandard level for the archive
        'max_results': 100,        # How many comics the shell prints per query
        'log_level': 'WARNING'
    }

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.load()
        return cls._instance

    def load(self):
        self.config_path = PathConfig.get_config_path()
        try:
            if self.config_path.exists():
                with open(self.config_path, 'r') as f:
                    self.settings = json.load(f)
                if not isinstance(self.settings, dict):
                    raise ValueError("config root must be an object")

                # Ensure new settings exist
                for key, default in self.DEFAULT_SETTINGS.items():
                    if key not in self.settings:
                        self.settings[key] = default
            else:
                self.settings = self.DEFAULT_SETTINGS.copy()
        except (OSError, ValueError) as e:
            logger.warning(
                "Ignoring unreadable config %s: %s", self.config_path, e
            )
            self.settings = self.DEFAULT_SETTINGS.copy()

    def save(self):
        with open(self.config_path, 'w') as f:
            json.dump(self.settings, f, indent=2)

    def get(self, key, default=None):
        return self.settings.get(key, default)

    def set(self, key, value):
        self.settings[key] = value
        self.save()

    def get_comic_count(self):
        return self.get('comic_count')

    def set_comic_count(self, value):
        """Pin the archive size; None goes back to auto-detection."""
        if value is not None:
            value = int(value)
            if value < 1:
                raise ValueError("Comic count must be at least 1")
        self.set('comic_count', value)

    def get_request_timeout(self) -> float:
        return self.get('request_timeout', 10)

    def set_request_timeout(self, value: float):
        value = float(value)
        if value <= 0:
            raise ValueError("Request timeout must be positive")
        self.set('request_timeout', value)

    def get_compression_level(self) -> int:
        return self.get('compression_level', 10)

    def set_compression_level(self, value: int):
        value = int(value)
        if not 1 <= value <= 22:
            raise ValueError("Compression level must be between 1 and 22")
        self.set('compression_level', value)

    def get_max_results(self) -> int:
        """Get number of comics printed per query."""
        return self.get('max_results', 100)

    def set_max_results(self, value: int):
        """Set number of printed results (1-100k)."""
        value = max(1, min(100_000, int(value)))
        self.set('max_results', value)

    def get_log_level(self) -> str:
        return self.get('log_level', 'WARNING')

    def set_log_level(self, value: str):
        value = str(value).upper()
        if value not in self.LOG_LEVELS:
            raise ValueError(f"Invalid log level: {value}")
        self.set('log_level', value)

# Singleton access
config_manager = ConfigManager()
