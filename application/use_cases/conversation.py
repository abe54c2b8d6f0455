# application/use_cases/conversation.py
import json
import logging
import threading
import time
from typing import Any, Dict, List

from application.use_cases.token_budget import TokenBudgetEstimator
from core.domain.errors import ConfigIncompleteError
from core.domain.models import ASSISTANT, SYSTEM, USER, ChatConfig, ChatMessage, ProjectFile
from core.ports.config_store_port import ConfigStorePort
from core.ports.file_handler_port import FileHandlerPort
from core.ports.prompt_builder_port import PromptBuilderPort
from core.ports.response_generator_port import ResponseGeneratorPort

logger = logging.getLogger(__name__)


class ConversationUseCase:
    """
    One chat conversation over a workspace.

    History keeps every message raw (untemplated). The whole history is
    re-rendered against the current config and file selection each time a
    request is built, so template or selection edits apply to past turns too.
    """

    def __init__(self,
                 file_handler: FileHandlerPort,
                 prompt_builder: PromptBuilderPort,
                 response_generator: ResponseGeneratorPort,
                 config_store: ConfigStorePort,
                 token_estimator: TokenBudgetEstimator):
        self.file_handler = file_handler
        self.prompt_builder = prompt_builder
        self.response_generator = response_generator
        self.config_store = config_store
        self.token_estimator = token_estimator

        self.history: List[ChatMessage] = [ChatMessage(role=SYSTEM, content="")]
        self.selected_files: List[str] = []

        # Serialises send() per conversation
        self._send_lock = threading.Lock()

    def select_files(self, paths: List[str]):
        """Replace the file selection wholesale, keeping first occurrences in order"""
        self.selected_files = list(dict.fromkeys(paths or []))

    def send(self, user_text: str) -> str:
        """
        Submit a user turn and return the assistant reply rendered for display.

        The user message stays in history when the request fails, so it can be
        re-sent. The reply is stored raw.
        """
        with self._send_lock:
            config = self.config_store.load()
            if not config.is_complete:
                raise ConfigIncompleteError()

            history = self.history
            history[0] = ChatMessage(role=SYSTEM, content=config.system_message)
            history.append(ChatMessage(role=USER, content=user_text))

            started = time.monotonic()
            messages = self.render_messages(list(history), list(self.selected_files), config)
            payload = self.build_payload(messages, config)

            reply = self.response_generator.complete(config.api_endpoint, payload, config.api_key).strip()
            history.append(ChatMessage(role=ASSISTANT, content=reply))
            logger.debug("Completed turn with %d messages in %.2fs", len(messages), time.monotonic() - started)

            return self.prompt_builder.render_assistant(reply, config.assistant_message_template)

    def estimate_tokens(self, candidate_input: str) -> int:
        """Token estimate of the next request if `candidate_input` were sent now"""
        config = self.config_store.load()
        history = list(self.history)
        history.append(ChatMessage(role=USER, content=candidate_input))
        messages = self.render_messages(history, list(self.selected_files), config)
        return self.token_estimator.estimate(messages)

    def get_full_context(self) -> str:
        config = self.config_store.load()
        messages = self.render_messages(list(self.history), list(self.selected_files), config)
        return json.dumps([message.to_dict() for message in messages], indent=2)

    def get_context_limit(self) -> int:
        return self.config_store.load().context_limit

    def clear(self):
        self.history = [ChatMessage(role=SYSTEM, content="")]
        self.selected_files = []

    def get_history(self) -> List[ChatMessage]:
        return list(self.history)

    def render_messages(self,
                        history: List[ChatMessage],
                        selected_files: List[str],
                        config: ChatConfig) -> List[ChatMessage]:
        rendered = []
        for message in history:
            if message.role == SYSTEM:
                content = self.render_system_message(config.system_message, selected_files)
            elif message.role == USER:
                content = self.prompt_builder.render_user(message.content, config.user_message_template)
            elif message.role == ASSISTANT:
                content = self.prompt_builder.render_assistant(message.content, config.assistant_message_template)
            else:
                content = message.content
            rendered.append(ChatMessage(role=message.role, content=content))
        return rendered

    def render_system_message(self, base_template: str, selected_files: List[str]) -> str:
        """Rebuild the system prompt from scratch; project files may have changed since the last turn"""
        project_files = self.file_handler.list_project_files()
        selected = [ProjectFile(filename=path, content=self.file_handler.read_file(path))
                    for path in selected_files]
        manifest = self.prompt_builder.build_manifest(project_files, selected)
        return self.prompt_builder.render_system(base_template, manifest)

    @staticmethod
    def build_payload(messages: List[ChatMessage], config: ChatConfig) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "messages": [message.to_dict() for message in messages],
            "max_tokens": int(config.max_tokens),
            "temperature": config.temperature,
            "top_p": config.top_p,
            "frequency_penalty": config.frequency_penalty,
            "presence_penalty": config.presence_penalty,
            "model": config.model_name,
            "response_format": {"type": config.response_format},
        }
        if config.stop_sequences:
            payload["stop"] = list(config.stop_sequences)
        return payload
