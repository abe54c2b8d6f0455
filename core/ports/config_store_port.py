# core/ports/config_store_port.py
from abc import ABC, abstractmethod

from core.domain.models import ChatConfig


class ConfigStorePort(ABC):
    @abstractmethod
    def load(self) -> ChatConfig:
        pass

    @abstractmethod
    def save(self, config: ChatConfig):
        pass
