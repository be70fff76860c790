# projboard — configuration
# Override defaults via projboard.yaml, PROJBOARD_CONFIG or --config.

import os
import yaml
from pathlib import Path
from dataclasses import dataclass, field, fields
from typing import List, Optional, Dict, Any

from .validation import ProjectInputRules

CONFIG_PATH = Path("projboard.yaml")
CONFIG_ENV = "PROJBOARD_CONFIG"


class ConfigError(Exception):
    """Raised when configuration is invalid or unreadable."""
    pass


@dataclass
class Config:
    """Runtime configuration for the project board."""

    # Server
    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "INFO"

    # Store
    id_prefix: str = "PRJ"

    # Form rules
    title_max_length: Optional[int] = None
    description_min_length: int = 5
    people_min: int = 1
    people_max: int = 5

    # Projects added at startup: {title, description, people, status}
    seed_projects: List[Dict[str, Any]] = field(default_factory=list)

    def input_rules(self) -> ProjectInputRules:
        return ProjectInputRules(
            title_max_length=self.title_max_length,
            description_min_length=self.description_min_length,
            people_min=self.people_min,
            people_max=self.people_max,
        )

    @classmethod
    def load(cls, path: Optional[str] = None) -> "Config":
        """Load config from YAML, falling back to defaults when the file is absent."""
        if path is None:
            path = os.environ.get(CONFIG_ENV)
        cfg_path = Path(path) if path else CONFIG_PATH
        if not cfg_path.exists():
            return cls()
        try:
            with open(cfg_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Cannot parse {cfg_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"{cfg_path} must contain a mapping, got {type(data).__name__}")
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})
