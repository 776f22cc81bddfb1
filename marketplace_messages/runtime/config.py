"""
Configuration Loader
====================

Loads configuration for the message core.

Every path defaults to the sample data bundled with the package.
Relative paths in a YAML file are resolved against the file's directory.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from ..generation.deadline import DEFAULT_REPLY_MINUTES
from ..observability.tracer import DEFAULT_MAX_TRACES

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass
class CatalogConfig:
    """Where the capability catalog lives."""
    path: str = str(DATA_DIR / "catalog" / "eClass.json")
    operations_path: Optional[str] = str(DATA_DIR / "catalog" / "operations.json")


@dataclass
class TemplatesConfig:
    """Directory with one <messageType>.json per message type."""
    path: str = str(DATA_DIR / "templates")


@dataclass
class MessagesConfig:
    """Message defaults."""
    default_reply_minutes: float = DEFAULT_REPLY_MINUTES


@dataclass
class TracingConfig:
    """Conversation tracing and the LangSmith project runs are filed under."""
    enabled: bool = True
    project_name: str = "marketplace-messages"
    max_traces: int = DEFAULT_MAX_TRACES


@dataclass
class Config:
    """Complete configuration."""
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    templates: TemplatesConfig = field(default_factory=TemplatesConfig)
    messages: MessagesConfig = field(default_factory=MessagesConfig)
    tracing: TracingConfig = field(default_factory=TracingConfig)

    @classmethod
    def default(cls) -> "Config":
        return cls()


def _resolve(base: Path, value: Optional[str], default: Optional[str]) -> Optional[str]:
    if value is None:
        return default
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = base / path
    return str(path)


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from YAML file or return defaults.

    Args:
        config_path: Path to YAML config file (optional)

    Returns:
        Config object with all settings
    """
    if config_path is None:
        return Config.default()

    path = Path(config_path)
    if not path.exists():
        logger.warning("[Config] %s not found, using defaults", config_path)
        return Config.default()

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    base = path.resolve().parent
    defaults = Config.default()
    catalog_data = data.get("catalog") or {}
    templates_data = data.get("templates") or {}
    messages_data = data.get("messages") or {}
    tracing_data = data.get("tracing") or {}

    return Config(
        catalog=CatalogConfig(
            path=_resolve(base, catalog_data.get("path"), defaults.catalog.path),
            operations_path=_resolve(
                base,
                catalog_data.get("operations_path"),
                defaults.catalog.operations_path,
            ),
        ),
        templates=TemplatesConfig(
            path=_resolve(base, templates_data.get("path"), defaults.templates.path),
        ),
        messages=MessagesConfig(
            default_reply_minutes=messages_data.get(
                "default_reply_minutes", DEFAULT_REPLY_MINUTES
            ),
        ),
        tracing=TracingConfig(
            enabled=tracing_data.get("enabled", True),
            project_name=tracing_data.get("project_name", "marketplace-messages"),
            max_traces=tracing_data.get("max_traces", DEFAULT_MAX_TRACES),
        ),
    )
