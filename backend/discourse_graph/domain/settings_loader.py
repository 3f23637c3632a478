import json
import logging
import os
from typing import Optional

import yaml
from pydantic import ValidationError as PydanticValidationError

from .defaults import default_settings
from .types import Settings

logger = logging.getLogger(__name__)


class SettingsLoader:
    """
    Loads and persists the discourse settings file.

    The file may be YAML (``.yaml``/``.yml``) or JSON; keys use the camelCase
    names of the persisted format, e.g.::

        nodeTypes:
          - id: node_abc
            name: Claim
            format: "CLM - {content}"
        relationTypes: [...]
        discourseRelations: [...]
    """

    def __init__(self, settings_path: Optional[str] = None):
        if settings_path is None:
            from discourse_graph.config import SETTINGS_PATH
            settings_path = SETTINGS_PATH
        self.settings_path = settings_path

    def _is_json(self) -> bool:
        return self.settings_path.lower().endswith(".json")

    def load(self) -> Settings:
        """Load settings, falling back to the defaults when no file exists."""
        if not os.path.exists(self.settings_path):
            logger.info("[SettingsLoader] No settings at %s, using defaults", self.settings_path)
            return default_settings()

        with open(self.settings_path, "r", encoding="utf-8") as f:
            if self._is_json():
                data = json.load(f)
            else:
                data = yaml.safe_load(f)

        try:
            settings = Settings.model_validate(data or {})
        except PydanticValidationError as e:
            logger.error("[SettingsLoader] Invalid settings file %s: %s", self.settings_path, e)
            raise

        logger.info(
            "[SettingsLoader] Loaded %d node types, %d relation types, %d relations",
            len(settings.node_types),
            len(settings.relation_types),
            len(settings.discourse_relations),
        )
        return settings

    def save(self, settings: Settings) -> None:
        directory = os.path.dirname(self.settings_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        data = settings.to_persisted()
        with open(self.settings_path, "w", encoding="utf-8") as f:
            if self._is_json():
                json.dump(data, f, indent=2)
            else:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
        logger.debug("[SettingsLoader] Saved settings to %s", self.settings_path)
