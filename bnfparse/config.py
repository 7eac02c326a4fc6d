# bnfparse/config.py
import os
import json
from pathlib import Path
from typing import Any, Dict, Optional

# Environment variable to override the base directory
BNFPARSE_HOME_ENV = "BNFPARSE_HOME"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000

_STATIC_DIR = Path(__file__).parent / "web" / "static"


class BnfParseConfigError(Exception):
    """Custom exception for bnfparse configuration errors."""
    pass


def get_base_dir() -> Path:
    """
    Get the bnfparse base directory.

    Priority:
    1. BNFPARSE_HOME environment variable
    2. ~/.bnfparse/ (default)
    """
    env_home = os.environ.get(BNFPARSE_HOME_ENV)
    if env_home:
        return Path(env_home).expanduser().resolve()
    return Path.home() / ".bnfparse"


def _ensure_bnfparse_dir() -> str:
    """Ensure that the base directory exists. Return its path."""
    base_dir = get_base_dir()
    os.makedirs(base_dir, exist_ok=True)
    return str(base_dir)


def _defaults() -> Dict[str, Any]:
    return {
        "host": DEFAULT_HOST,
        "port": DEFAULT_PORT,
        "log_level": "INFO",
        "log_to_file": False,
        "webpage_path": str(_STATIC_DIR / "index.html"),
        "api_spec_path": str(_STATIC_DIR / "api_spec.yaml"),
    }


class BnfParseConfig:
    def __init__(self, **kwargs):
        data = _defaults()
        unknown = set(kwargs) - set(data)
        if unknown:
            raise BnfParseConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        data.update(kwargs)
        data["webpage_path"] = os.path.expanduser(data["webpage_path"])
        data["api_spec_path"] = os.path.expanduser(data["api_spec_path"])
        try:
            data["port"] = int(data["port"])
        except (TypeError, ValueError):
            raise BnfParseConfigError(f"Invalid port: {data['port']!r}")
        self._data = data

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def __getattr__(self, name: str) -> Any:
        if name in self._data:
            return self._data[name]
        raise AttributeError(f"'BnfParseConfig' object has no attribute '{name}'")

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "_data":
            super().__setattr__(name, value)
        else:
            self._data[name] = value

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._data)

    @classmethod
    def load(cls, path: Optional[str] = None) -> "BnfParseConfig":
        """
        Load config from `path`, or from config.json in the base directory.

        A missing default file is created with default values; a missing
        explicit path is an error.
        """
        if path is None:
            config_path = os.path.join(_ensure_bnfparse_dir(), "config.json")
            if not os.path.exists(config_path):
                config = cls()
                config.save(config_path)
                return config
        else:
            config_path = os.path.expanduser(path)

        try:
            with open(config_path, "r") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise BnfParseConfigError(f"Failed to load config from {config_path}: {e}")
        if not isinstance(data, dict):
            raise BnfParseConfigError(f"Config in {config_path} must be a JSON object")
        return cls(**data)

    def save(self, path: Optional[str] = None) -> None:
        config_path = path or os.path.join(_ensure_bnfparse_dir(), "config.json")
        try:
            with open(config_path, "w") as f:
                json.dump(self._data, f, indent=2)
        except OSError as e:
            raise BnfParseConfigError(f"Failed to save bnfparse config: {e}")
