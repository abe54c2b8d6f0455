# infrastructure/adapters/config_stores/json_config_adapter.py
import json
import logging
import os

from core.domain.models import ChatConfig
from core.ports.config_store_port import ConfigStorePort

logger = logging.getLogger(__name__)


class JsonConfigAdapter(ConfigStorePort):
    """Chat settings persisted as a flat JSON record, read fresh on every load"""

    def __init__(self, config_path: str = "config.json"):
        self.config_path = config_path

    def load(self) -> ChatConfig:
        try:
            with open(self.config_path, 'r', encoding='utf-8') as file:
                data = json.load(file)
        except FileNotFoundError:
            return ChatConfig()
        except (OSError, ValueError) as e:
            logger.warning("Could not read config %s, using defaults: %s", self.config_path, e)
            return ChatConfig()

        if not isinstance(data, dict):
            logger.warning("Config %s is not a JSON object, using defaults", self.config_path)
            return ChatConfig()

        try:
            return ChatConfig.from_dict(data)
        except (TypeError, ValueError) as e:
            logger.warning("Invalid values in config %s, using defaults: %s", self.config_path, e)
            return ChatConfig()

    def save(self, config: ChatConfig):
        directory = os.path.dirname(os.path.abspath(self.config_path))
        os.makedirs(directory, exist_ok=True)
        with open(self.config_path, 'w', encoding='utf-8') as file:
            json.dump(config.to_dict(), file, indent=2)
