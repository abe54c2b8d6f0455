# infrastructure/adapters/file_handlers/local_file_adapter.py
import logging
import os
from typing import List, Optional

import pathspec
from werkzeug.security import safe_join

from core.domain.errors import NoWorkspaceError, WorkspaceFileNotFoundError
from core.ports.file_handler_port import FileHandlerPort

logger = logging.getLogger(__name__)


class LocalFileAdapter(FileHandlerPort):
    """Project file catalog rooted at a workspace directory.

    Paths going in and out are workspace-relative with '/' separators.
    Nothing is cached: the ignore file and the tree are read on every call.
    """

    def __init__(self, workspace_root: Optional[str] = None, ignore_file: str = ".gitignore"):
        self.workspace_root = os.path.abspath(workspace_root) if workspace_root else None
        self.ignore_file = ignore_file

    def has_workspace(self) -> bool:
        return bool(self.workspace_root) and os.path.isdir(self.workspace_root)

    def list_project_files(self) -> List[str]:
        """Return every file under the root not matched by the ignore file, in sorted walk order"""
        if not self.has_workspace():
            return []

        ignore_spec = self._load_ignore_spec()
        files: List[str] = []
        self._walk_directory(self.workspace_root, "", ignore_spec, files)
        return files

    def _load_ignore_spec(self) -> Optional[pathspec.GitIgnoreSpec]:
        ignore_path = os.path.join(self.workspace_root, self.ignore_file)
        try:
            with open(ignore_path, 'r', encoding='utf-8') as file:
                return pathspec.GitIgnoreSpec.from_lines(file.read().splitlines())
        except OSError:
            logger.info("No %s file found or error reading it. Proceeding without ignore rules.", self.ignore_file)
            return None

    def _walk_directory(self, directory: str, prefix: str, ignore_spec, filelist: List[str]):
        for name in sorted(os.listdir(directory)):
            full_path = os.path.join(directory, name)
            relative_path = f"{prefix}{name}"
            is_dir = os.path.isdir(full_path)

            if ignore_spec is not None:
                candidate = relative_path + "/" if is_dir else relative_path
                if ignore_spec.match_file(candidate):
                    continue

            if is_dir:
                self._walk_directory(full_path, relative_path + "/", ignore_spec, filelist)
            else:
                filelist.append(relative_path)

    def _resolve(self, path: str) -> str:
        if not self.has_workspace():
            raise NoWorkspaceError()
        full_path = safe_join(self.workspace_root, path.replace("\\", "/"))
        if full_path is None:
            raise WorkspaceFileNotFoundError(path)
        return full_path

    def read_file(self, path: str) -> str:
        full_path = self._resolve(path)
        if not os.path.isfile(full_path):
            raise WorkspaceFileNotFoundError(path)
        try:
            with open(full_path, 'r', encoding='utf-8', newline='') as file:
                return file.read()
        except UnicodeDecodeError:
            return f"[Binary file content - {os.path.getsize(full_path)} bytes]"

    def write_file(self, path: str, content: str):
        full_path = self._resolve(path)
        os.makedirs(os.path.dirname(full_path), exist_ok=True)
        with open(full_path, 'w', encoding='utf-8', newline='') as file:
            file.write(content)
        logger.info("Wrote %d characters to %s", len(content), path)
