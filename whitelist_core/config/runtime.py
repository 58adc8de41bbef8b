"""
Runtime Configuration

Central configuration for tree construction, the whitelist source and logging.
"""

from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from whitelist_core.crypto.hashing import HashPrimitive, get_hash_primitive

load_dotenv()


# Environment variable prefix
ENV_PREFIX = "WHITELIST_"


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "y", "on"}


@dataclass
class TreeConfig:
    """Configuration for Merkle tree construction."""
    hash_algorithm: str = "keccak256"
    sort_pairs: bool = True

    def hash_fn(self) -> HashPrimitive:
        """Resolve the configured hash primitive."""
        return get_hash_primitive(self.hash_algorithm)


@dataclass
class WhitelistConfig:
    """Where the whitelisted items come from."""
    items: list[str] = field(default_factory=list)
    items_file: Optional[str] = None

    def load_items(self) -> list[str]:
        """
        Return the configured items followed by the items in items_file.

        The file holds one item per line; blank lines and lines starting
        with '#' are skipped. Items are not otherwise validated.

        Raises:
            FileNotFoundError: If items_file is set but does not exist
        """
        items = list(self.items)
        if self.items_file:
            path = Path(self.items_file)
            if not path.exists():
                raise FileNotFoundError(f"Items file not found: {path}")
            for line in path.read_text(encoding="utf-8").splitlines():
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                items.append(line)
        return items


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML or JSON file
    - Programmatic construction
    """
    tree: TreeConfig = field(default_factory=TreeConfig)
    whitelist: WhitelistConfig = field(default_factory=WhitelistConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - WHITELIST_HASH_ALGORITHM: Hash primitive name (sha256, keccak256)
        - WHITELIST_SORT_PAIRS: Sort sibling pairs (true/false)
        - WHITELIST_ITEMS_FILE: File with one whitelisted item per line
        - WHITELIST_LOG_LEVEL: Log level
        - WHITELIST_LOG_FILE: Optional log file
        """
        overrides: dict[str, Any] = {}

        # Tree settings
        if os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM"):
            overrides.setdefault("tree", {})["hash_algorithm"] = os.getenv(
                f"{ENV_PREFIX}HASH_ALGORITHM"
            )
        if os.getenv(f"{ENV_PREFIX}SORT_PAIRS"):
            overrides.setdefault("tree", {})["sort_pairs"] = _to_bool(
                os.getenv(f"{ENV_PREFIX}SORT_PAIRS")
            )

        # Whitelist source
        if os.getenv(f"{ENV_PREFIX}ITEMS_FILE"):
            overrides.setdefault("whitelist", {})["items_file"] = os.getenv(
                f"{ENV_PREFIX}ITEMS_FILE"
            )

        # Logging
        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(
                f"{ENV_PREFIX}LOG_LEVEL"
            )
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv(
                f"{ENV_PREFIX}LOG_FILE"
            )

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_json(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r") as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a .json, .yaml or .yml file."""
        path = Path(path)
        if path.suffix.lower() == ".json":
            return cls.from_json(path)
        return cls.from_yaml(path)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        tree_data = dict(data.get("tree") or {})
        whitelist_data = dict(data.get("whitelist") or {})
        logging_data = data.get("logging") or {}

        if "sort_pairs" in tree_data:
            tree_data["sort_pairs"] = _to_bool(tree_data["sort_pairs"])
        if whitelist_data.get("items") is not None:
            whitelist_data["items"] = [str(item) for item in whitelist_data["items"]]

        tree = TreeConfig(**tree_data) if tree_data else TreeConfig()
        whitelist = WhitelistConfig(**whitelist_data) if whitelist_data else WhitelistConfig()
        logging_config = LoggingConfig(**logging_data) if logging_data else LoggingConfig()

        return cls(
            tree=tree,
            whitelist=whitelist,
            logging=logging_config,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        for key, value in overrides.get("tree", {}).items():
            setattr(new_config.tree, key, value)
        for key, value in overrides.get("whitelist", {}).items():
            setattr(new_config.whitelist, key, value)
        for key, value in overrides.get("logging", {}).items():
            setattr(new_config.logging, key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "tree": {
                "hash_algorithm": self.tree.hash_algorithm,
                "sort_pairs": self.tree.sort_pairs,
            },
            "whitelist": {
                "items": list(self.whitelist.items),
                "items_file": self.whitelist.items_file,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
            "extra": self.extra,
        }


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file. When omitted, the
                     default locations are searched in order.

    Returns:
        Merged configuration

    Raises:
        FileNotFoundError: If config_path is given but does not exist
    """
    config = RuntimeConfig()

    if config_path is not None:
        config = RuntimeConfig.from_file(config_path)
    else:
        default_paths = [
            Path.cwd() / "whitelist.yaml",
            Path.cwd() / "whitelist.json",
            Path.home() / ".config" / "merkle-whitelist" / "config.yaml",
        ]
        for default_path in default_paths:
            if default_path.exists():
                config = RuntimeConfig.from_file(default_path)
                break

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file (YAML)."""
    return """# merkle-whitelist configuration
tree:
  hash_algorithm: keccak256   # sha256 | keccak256
  sort_pairs: true

whitelist:
  items:
    - email1@example.com
    - email2@example.com
    - email3@example.com
  items_file: null            # optional: one item per line

logging:
  level: INFO
  file: null
"""


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set the default runtime configuration."""
    global _default_config
    _default_config = config
