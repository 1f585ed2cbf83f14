# MiDaPlaner configuration
# Override via midaplaner.yaml, MIDAPLANER_* environment variables or CLI args.

import logging
import os
import yaml
from pathlib import Path
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

CONFIG_PATH = Path.cwd() / "midaplaner.yaml"

# Users the desktop build always started with
DEFAULT_SEED_USERS: List[Dict[str, str]] = [
    {"username": "manager", "password": "123", "role": "MANAGER"},
    {"username": "employee", "password": "123", "role": "EMPLOYEE"},
]

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """Runtime configuration for the planner server."""

    # HTTP
    host: str = "127.0.0.1"
    port: int = 3000

    # Logging
    log_level: str = "INFO"

    # Start-up users
    seed_defaults: bool = True
    seed_users: List[Dict[str, str]] = field(default_factory=list)

    def all_seed_users(self) -> List[Dict[str, str]]:
        """Default users (if enabled) followed by configured ones."""
        users = list(DEFAULT_SEED_USERS) if self.seed_defaults else []
        return users + list(self.seed_users or [])

    def apply_env(self, environ: Optional[Dict[str, str]] = None) -> None:
        """Environment wins over file values."""
        env = os.environ if environ is None else environ
        if env.get("MIDAPLANER_HOST"):
            self.host = env["MIDAPLANER_HOST"]
        if env.get("MIDAPLANER_PORT"):
            try:
                self.port = int(env["MIDAPLANER_PORT"])
            except ValueError:
                logger.warning(f"Ignoring non-numeric MIDAPLANER_PORT={env['MIDAPLANER_PORT']!r}")
        if env.get("MIDAPLANER_LOG_LEVEL"):
            self.log_level = env["MIDAPLANER_LOG_LEVEL"].upper()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """
        Build from a mapping, ignoring keys that are not config fields.

        Values of the wrong type are coerced where possible, otherwise the
        field keeps its default and a warning is logged.
        """
        cfg = cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})
        defaults = cls()

        try:
            cfg.port = int(cfg.port)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring non-numeric port={cfg.port!r}")
            cfg.port = defaults.port

        for name in ("host", "log_level"):
            value = getattr(cfg, name)
            if value is None or isinstance(value, (list, dict)):
                logger.warning(f"Ignoring {name}={value!r}")
                setattr(cfg, name, getattr(defaults, name))
            else:
                setattr(cfg, name, str(value))
        cfg.log_level = cfg.log_level.upper()

        if not isinstance(cfg.seed_defaults, bool):
            logger.warning(f"Ignoring seed_defaults={cfg.seed_defaults!r}, expected true/false")
            cfg.seed_defaults = defaults.seed_defaults

        # `seed_users:` with nothing after it loads as None
        if cfg.seed_users is None:
            cfg.seed_users = []
        elif not isinstance(cfg.seed_users, list):
            logger.warning(f"Ignoring seed_users, expected a list: {cfg.seed_users!r}")
            cfg.seed_users = []
        return cfg

    @classmethod
    def load(cls, path: Optional[str] = None, environ: Optional[Dict[str, str]] = None) -> "Config":
        """Load config from YAML file, falling back to defaults."""
        cfg_path = Path(path) if path else CONFIG_PATH
        if cfg_path.exists():
            try:
                with open(cfg_path, "r") as f:
                    data = yaml.safe_load(f) or {}
                if not isinstance(data, dict):
                    raise TypeError("top level must be a mapping")
                cfg = cls.from_dict(data)
            except (OSError, yaml.YAMLError, TypeError) as e:
                logger.warning(f"Could not read {cfg_path}, using defaults: {e}")
                cfg = cls()
        else:
            cfg = cls()
        cfg.apply_env(environ)
        return cfg
