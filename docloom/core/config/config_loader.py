"""Configuration loading for docloom.

Settings come from ``config/docloom.yaml`` (or ``$DOCLOOM_CONFIG_DIR/docloom.yaml``)
and are validated into pydantic models. A few environment variables override
the file so deployments can be tuned without editing it:

  DOCLOOM_ALLOWED_BASE_DIR  uml.allowed_base_directory
  JAVADOC_OUTPUT_DIR        javadoc.output_base_dir
  JAVADOC_COMMAND           javadoc.command
  MAVEN_COMMAND             javadoc.maven_command
  PLANTUML_JAR_PATH         renderer.jar_path
  PLANTUML_SERVER_URL       renderer.server_url

The parsed result is cached; call reload_configs() after editing the file.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from ..errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "docloom.yaml"

_DEFAULT_CONFIG_DIR = Path(__file__).parents[3] / "config"

_ENV_OVERRIDES = {
    "DOCLOOM_ALLOWED_BASE_DIR": ("uml", "allowed_base_directory"),
    "JAVADOC_OUTPUT_DIR": ("javadoc", "output_base_dir"),
    "JAVADOC_COMMAND": ("javadoc", "command"),
    "MAVEN_COMMAND": ("javadoc", "maven_command"),
    "PLANTUML_JAR_PATH": ("renderer", "jar_path"),
    "PLANTUML_SERVER_URL": ("renderer", "server_url"),
}


class UMLSettings(BaseModel):
    allowed_base_directory: Optional[str] = Field(
        None, description="Diagram requests must point inside this directory; unrestricted when unset"
    )
    source_extension: str = ".java"


class JavadocSettings(BaseModel):
    output_base_dir: str = "generated-javadoc"
    command: str = "javadoc"
    maven_command: str = "mvn"
    timeout_seconds: int = 600
    maven_timeout_seconds: int = 300
    disable_doclint: bool = False


class RendererSettings(BaseModel):
    jar_path: Optional[str] = None
    server_url: str = "https://www.plantuml.com/plantuml"
    jar_timeout_seconds: int = 60
    http_timeout_seconds: float = 30.0


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 9010
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])


class DocloomSettings(BaseModel):
    uml: UMLSettings = Field(default_factory=UMLSettings)
    javadoc: JavadocSettings = Field(default_factory=JavadocSettings)
    renderer: RendererSettings = Field(default_factory=RendererSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)


def get_config_path() -> Path:
    """Directory holding docloom.yaml."""
    env_dir = os.environ.get("DOCLOOM_CONFIG_DIR")
    return Path(env_dir) if env_dir else _DEFAULT_CONFIG_DIR


def _read_yaml(config_file: Path) -> Dict[str, Any]:
    if not config_file.is_file():
        logger.info("No config file at %s, using defaults", config_file)
        return {}
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read {config_file}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file} must contain a mapping at the top level")
    return data


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    for env_name, (section, key) in _ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            section_data = data.get(section) or {}
            section_data[key] = value
            data[section] = section_data
    return data


@lru_cache(maxsize=1)
def load_unified_config() -> DocloomSettings:
    """Load, override and validate the configuration (cached)."""
    config_file = get_config_path() / CONFIG_FILE_NAME
    data = _apply_env_overrides(_read_yaml(config_file))
    try:
        return DocloomSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_file}: {e}") from e


def get_settings() -> DocloomSettings:
    return load_unified_config()


def reload_configs() -> None:
    """Clear cached configuration so the next read picks up changes."""
    load_unified_config.cache_clear()
