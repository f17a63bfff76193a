"""
Configuration schema for Librarium.

Defines all configurable options with metadata for validation
and documentation.
"""

from enum import Enum
from typing import Optional, List, Any
from dataclasses import dataclass


class ConfigType(Enum):
    """Configuration value types."""
    STRING = "string"
    INTEGER = "integer"
    PATH = "path"          # File system path
    URL = "url"
    LIST = "list"          # Comma-separated values


class ConfigCategory(Enum):
    """Configuration categories for grouping."""
    PATHS = "paths"
    SERVER = "server"
    FEATURES = "features"


@dataclass
class ConfigField:
    """Definition of a configuration field."""
    key: str
    attr: str                    # Settings attribute the value lands on
    description: str
    config_type: ConfigType
    category: ConfigCategory
    required: bool = False
    default: Any = None
    env_var: str = None          # Override env var name (defaults to key)
    options: List[str] = None    # For enumerated types

    def __post_init__(self):
        if self.env_var is None:
            self.env_var = self.key


DEFAULT_PREVIEW_EXTENSIONS = [
    ".txt", ".md", ".json", ".yml", ".yaml", ".csv",
    ".log", ".xml", ".html", ".py", ".js", ".ts",
]

DEFAULT_PROMPT_EXTENSIONS = [".yml", ".yaml", ".json"]


# ==================== Schema Definition ====================

CONFIG_SCHEMA: List[ConfigField] = [
    # === Paths ===
    ConfigField(
        key="DIRECTORY_BROWSING_PATH",
        attr="base_directory",
        description="Root directory exposed by the file browser",
        config_type=ConfigType.PATH,
        category=ConfigCategory.PATHS,
        required=True,
    ),
    ConfigField(
        key="PROMPTS_DIR_PATH",
        attr="prompts_directory",
        description="Root directory of the prompt library (folder/action/file)",
        config_type=ConfigType.PATH,
        category=ConfigCategory.PATHS,
        required=True,
    ),

    # === Server ===
    ConfigField(
        key="STATIC_FILE_BASE_URL",
        attr="static_base_url",
        description="Public URL prefix for file downloads (empty = serve through the API)",
        config_type=ConfigType.URL,
        category=ConfigCategory.SERVER,
        default="",
    ),
    ConfigField(
        key="HOST",
        attr="host",
        description="Interface the HTTP server binds to",
        config_type=ConfigType.STRING,
        category=ConfigCategory.SERVER,
        default="127.0.0.1",
    ),
    ConfigField(
        key="PORT",
        attr="port",
        description="Port the HTTP server listens on",
        config_type=ConfigType.INTEGER,
        category=ConfigCategory.SERVER,
        default=8000,
    ),
    ConfigField(
        key="LOG_LEVEL",
        attr="log_level",
        description="Logging level for the librarium loggers",
        config_type=ConfigType.STRING,
        category=ConfigCategory.SERVER,
        default="INFO",
        options=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    ),

    # === Features ===
    ConfigField(
        key="PREVIEW_EXTENSIONS",
        attr="preview_extensions",
        description="Extensions whose content may be previewed as text",
        config_type=ConfigType.LIST,
        category=ConfigCategory.FEATURES,
        default=DEFAULT_PREVIEW_EXTENSIONS,
    ),
    ConfigField(
        key="PROMPT_EXTENSIONS",
        attr="prompt_extensions",
        description="Extensions listed as prompt files at folder level",
        config_type=ConfigType.LIST,
        category=ConfigCategory.FEATURES,
        default=DEFAULT_PROMPT_EXTENSIONS,
    ),
]


def get_schema_by_key(key: str) -> Optional[ConfigField]:
    """Get schema field by key."""
    for field in CONFIG_SCHEMA:
        if field.key == key:
            return field
    return None

