# core/ports/prompt_builder_port.py
from abc import ABC, abstractmethod
from typing import List

from core.domain.models import ProjectFile


class PromptBuilderPort(ABC):
    @abstractmethod
    def render_user(self, content: str, template: str) -> str:
        pass

    @abstractmethod
    def render_assistant(self, content: str, template: str) -> str:
        pass

    @abstractmethod
    def render_system(self, base_template: str, manifest: str) -> str:
        pass

    @abstractmethod
    def build_manifest(self, project_files: List[str], selected_files: List[ProjectFile]) -> str:
        pass
