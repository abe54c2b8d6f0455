# core/ports/response_generator_port.py
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class ResponseGeneratorPort(ABC):
    @abstractmethod
    def complete(self, endpoint: str, payload: Dict[str, Any], api_key: Optional[str] = None) -> str:
        pass
