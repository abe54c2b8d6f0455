# infrastructure/adapters/prompt_builders/template_adapter.py
import re
from typing import Dict, List, Tuple

from core.domain.models import MESSAGE_PLACEHOLDER, PROJECT_FILES_PLACEHOLDER, ProjectFile
from core.ports.prompt_builder_port import PromptBuilderPort

SELECTED_FILES_HEADER = "\n\nSelected file contents:\n\n"
FILE_BLOCK_SEPARATOR = "---\n\n"

_FILE_BLOCK_RE = re.compile(
    r"File: `(?P<path>[^`\n]+)`\n```\n(?P<content>.*?)\n```\n\n(?=---\n\nFile: `|\Z)",
    re.DOTALL,
)


def render_file_block(project_file: ProjectFile) -> str:
    return f"File: `{project_file.filename}`\n```\n{project_file.content}\n```\n\n"


def build_manifest(project_files: List[str], selected_files: List[ProjectFile]) -> str:
    """Newline-joined file list, followed by fenced contents of the selected files"""
    manifest = "\n".join(project_files)
    if selected_files:
        blocks = [render_file_block(selected) for selected in selected_files]
        manifest += SELECTED_FILES_HEADER + FILE_BLOCK_SEPARATOR.join(blocks)
    return manifest


def parse_manifest(manifest: str) -> Tuple[List[str], Dict[str, str]]:
    """Split a manifest back into its file list and {path: content} of embedded files"""
    listing, _, selected = manifest.partition(SELECTED_FILES_HEADER)
    files = listing.split("\n") if listing else []
    contents = {match.group("path"): match.group("content") for match in _FILE_BLOCK_RE.finditer(selected)}
    return files, contents


class TemplatePromptAdapter(PromptBuilderPort):
    """Single-placeholder substitution for each message role.

    When a template lacks its placeholder the template is returned as-is and
    the dynamic content is dropped.
    """

    def render_user(self, content: str, template: str) -> str:
        return template.replace(MESSAGE_PLACEHOLDER, content, 1)

    def render_assistant(self, content: str, template: str) -> str:
        return template.replace(MESSAGE_PLACEHOLDER, content, 1)

    def render_system(self, base_template: str, manifest: str) -> str:
        return base_template.replace(PROJECT_FILES_PLACEHOLDER, manifest, 1)

    def build_manifest(self, project_files: List[str], selected_files: List[ProjectFile]) -> str:
        return build_manifest(project_files, selected_files)
