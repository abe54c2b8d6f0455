# core/ports/tokenizer_port.py
from abc import ABC, abstractmethod


class TokenizerPort(ABC):
    @abstractmethod
    def count(self, text: str) -> int:
        pass
