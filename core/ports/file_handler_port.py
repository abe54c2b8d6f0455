# core/ports/file_handler_port.py
from abc import ABC, abstractmethod
from typing import List


class FileHandlerPort(ABC):
    @abstractmethod
    def has_workspace(self) -> bool:
        pass

    @abstractmethod
    def list_project_files(self) -> List[str]:
        pass

    @abstractmethod
    def read_file(self, path: str) -> str:
        pass

    @abstractmethod
    def write_file(self, path: str, content: str):
        pass
