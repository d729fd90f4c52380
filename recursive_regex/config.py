"""
Configuration management using Pydantic Settings with safe access wrapper
"""
import re
from pydantic_settings import BaseSettings
from typing import List, Optional, Any


class Settings(BaseSettings):
    # Logging settings
    log_level: str = "WARNING"
    log_file: Optional[str] = None
    log_file_max_bytes: int = 10485760
    log_file_backup_count: int = 5

    # Pattern compilation
    default_regex_flags: List[str] = []

    # Scalar parsing
    bool_true_values: List[str] = ["true", "t", "yes", "y", "1"]
    bool_false_values: List[str] = ["false", "f", "no", "n", "0"]

    # Declarative trees
    patterns_dir: str = "patterns"

    class Config:
        env_prefix = "RECURSIVE_REGEX_"
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"   # allow unknown env vars without error

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.validate_settings()

    def validate_settings(self):
        """Validate settings on startup"""
        errors = []

        if self.log_level.upper() not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            errors.append(f"Invalid log level: {self.log_level}")

        for name in self.default_regex_flags:
            if not isinstance(getattr(re, name.upper(), None), re.RegexFlag):
                errors.append(f"Unknown regex flag: {name}")

        overlap = {v.lower() for v in self.bool_true_values} & {v.lower() for v in self.bool_false_values}
        if overlap:
            errors.append(f"Words listed as both true and false: {sorted(overlap)}")

        if errors:
            raise ValueError(f"Configuration errors: {'; '.join(errors)}")

    @property
    def regex_flags(self) -> int:
        """Combined ``re`` flags named by ``default_regex_flags``"""
        flags = 0
        for name in self.default_regex_flags:
            flags |= getattr(re, name.upper())
        return flags


class SafeSettings:
    """Safe wrapper for settings with fallback defaults"""

    def __init__(self, settings: Settings):
        self._settings = settings
        self._defaults = {
            "log_level": "WARNING",
            "log_file_max_bytes": 10485760,
            "log_file_backup_count": 5,
            "default_regex_flags": [],
            "regex_flags": 0,
            "bool_true_values": ["true", "t", "yes", "y", "1"],
            "bool_false_values": ["false", "f", "no", "n", "0"],
            "patterns_dir": "patterns",
        }

    def get(self, key: str, default: Any = None) -> Any:
        """Get setting value with fallback"""
        value = getattr(self._settings, key, None)
        if value is None:
            value = self._defaults.get(key, default)
        return value

    def __getattr__(self, key: str) -> Any:
        """Proxy attribute access with safety"""
        return self.get(key)

    @property
    def raw(self) -> Settings:
        """Get raw settings object"""
        return self._settings


# Initialize settings with safety wrapper
_raw_settings = Settings()
settings = SafeSettings(_raw_settings)
