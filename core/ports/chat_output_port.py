# core/ports/chat_output_port.py
from abc import ABC, abstractmethod
from typing import Any, Dict


class ChatOutputPort(ABC):
    @abstractmethod
    def emit(self, command: str, data: Dict[str, Any]):
        """Push an outbound event (e.g. 'receiveMessage') to the UI surface"""
        pass

    @abstractmethod
    def display_error(self, message: str):
        pass
