"""
Config Loader - Load runtime settings and custom modes from YAML
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

from ..constants import DEFAULT_COMMAND_OUTPUT_LINE_LIMIT, DEFAULT_LIST_FILES_LIMIT
from ..errors import ConfigError

logger = logging.getLogger(__name__)


class ModeConfig(BaseModel):
    """A user-defined mode the new_task tool can delegate to"""
    slug: str
    name: str
    role_definition: str = ""
    groups: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")


class RuntimeSettings(BaseModel):
    """Settings the tools consult at execution time"""

    # Block attempt_completion while the task's todo list has open items
    prevent_completion_with_open_todos: bool = False

    # Require new_task callers to pass a todos checklist
    new_task_require_todos: bool = False

    # Maximum entries returned by list_files
    list_files_limit: int = Field(default=DEFAULT_LIST_FILES_LIMIT, gt=0)

    # Only the first complete tool of a turn is executed
    single_tool_per_turn: bool = True

    # 0 disables the timeout
    command_timeout_seconds: float = Field(default=0, ge=0)

    command_output_line_limit: int = Field(default=DEFAULT_COMMAND_OUTPUT_LINE_LIMIT, gt=0)

    # -1 reads whole files
    max_read_file_line: int = -1

    custom_modes: List[ModeConfig] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")  # Ignore unknown fields in YAML


class ConfigLoader:
    """
    Load configurations from YAML files

    Expected directory structure:
        config/
        ├── settings.yaml     # Runtime settings
        └── modes.yaml        # Custom modes

    Or single file:
        config/taskvalet.yaml  # All-in-one config

    Example taskvalet.yaml:
        settings:
          prevent_completion_with_open_todos: true
          list_files_limit: 100
          command_timeout_seconds: 30

        custom_modes:
          - slug: reviewer
            name: Reviewer
            role_definition: Review pull requests
            groups: [read]
    """

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize config loader

        Args:
            config_dir: Path to config directory (default: ./config)
        """
        self.config_dir = Path(config_dir) if config_dir else Path("config")
        self._settings: Dict[str, Any] = {}
        self._custom_modes: List[Dict[str, Any]] = []
        self._loaded: Optional[RuntimeSettings] = None

    def load(self) -> RuntimeSettings:
        """Load all configurations and return validated settings"""
        single_file = self.config_dir / "taskvalet.yaml"
        if single_file.exists():
            data = self._read_yaml(single_file)
            self._settings = data.get("settings") or {}
            self._custom_modes = data.get("custom_modes") or []
        else:
            self._settings = self._read_yaml(self.config_dir / "settings.yaml")
            self._custom_modes = self._read_yaml(self.config_dir / "modes.yaml").get("custom_modes") or []

        try:
            payload = dict(self._settings)
            if self._custom_modes:
                payload["custom_modes"] = self._custom_modes
            self._loaded = RuntimeSettings(**payload)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid settings in {self.config_dir}: {e}") from e

        logger.info(
            f"Loaded settings from {self.config_dir} "
            f"({len(self._loaded.custom_modes)} custom modes)"
        )
        return self._loaded

    def _read_yaml(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            logger.debug(f"No {path.name} found at {path}")
            return {}

        logger.info(f"Loading config from {path}")
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a mapping at the top level")
        return data

    @property
    def settings(self) -> RuntimeSettings:
        """Loaded settings (defaults when load() has not been called)"""
        return self._loaded or RuntimeSettings()
