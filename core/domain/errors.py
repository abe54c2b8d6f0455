# core/domain/errors.py
from typing import Optional


class AssistantError(Exception):
    """Base class for every error surfaced to the user"""


class ConfigIncompleteError(AssistantError):
    def __init__(self, message: str = "API endpoint is not configured"):
        super().__init__(message)


class FileCatalogError(AssistantError):
    pass


class NoWorkspaceError(FileCatalogError):
    def __init__(self, message: str = "No workspace folder found"):
        super().__init__(message)


class WorkspaceFileNotFoundError(FileCatalogError):
    def __init__(self, path: str):
        super().__init__(f"File not found in workspace: {path}")
        self.path = path


class CompletionError(AssistantError):
    pass


class UnreachableError(CompletionError):
    pass


class BadResponseError(CompletionError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class UnauthorizedError(BadResponseError):
    pass
