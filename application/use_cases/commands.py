# application/use_cases/commands.py
import logging
from typing import Any, Callable, Dict, Optional

from application.use_cases.conversation import ConversationUseCase
from core.domain.errors import AssistantError
from core.domain.models import ChatConfig
from core.ports.chat_output_port import ChatOutputPort
from core.ports.config_store_port import ConfigStorePort
from core.ports.file_handler_port import FileHandlerPort

logger = logging.getLogger(__name__)


class ChatCommandHandler:
    """Dispatches UI commands to a conversation and pushes the results back out"""

    def __init__(self,
                 conversation: ConversationUseCase,
                 file_handler: FileHandlerPort,
                 config_store: ConfigStorePort,
                 output_port: ChatOutputPort):
        self.conversation = conversation
        self.file_handler = file_handler
        self.config_store = config_store
        self.output_port = output_port

        self._handlers: Dict[str, Callable[[Dict[str, Any]], None]] = {
            'loadConfig': self._load_config,
            'saveConfig': self._save_config,
            'sendMessage': self._send_message,
            'getProjectFiles': self._get_project_files,
            'updateTokenCount': self._update_token_count,
            'getFullContext': self._get_full_context,
            'getContextLimit': self._get_context_limit,
            'writeToFile': self._write_to_file,
            'clearConversation': self._clear_conversation,
        }

    @property
    def commands(self):
        return list(self._handlers)

    def handle(self, message: Dict[str, Any]) -> bool:
        """
        Handle one inbound message of the form {'command': name, ...}.

        Returns False when the command failed or is unknown; the failure has
        already been reported through the output port.
        """
        command = message.get('command')
        handler = self._handlers.get(command)
        if handler is None:
            logger.warning("Unknown command: %s", command)
            self.output_port.display_error(f"Unknown command: {command}")
            return False

        try:
            handler(message)
            return True
        except (AssistantError, OSError, ValueError) as e:
            logger.error("Error handling %s: %s", command, e)
            self.output_port.display_error(f"Error: {str(e)}")
        except Exception as e:
            logger.exception("Unexpected error handling %s", command)
            self.output_port.display_error(f"Error: {str(e)}")
        return False

    def _load_config(self, message):
        config = self.config_store.load()
        self.output_port.emit('initializeData', {'data': config.to_dict()})

    def _save_config(self, message):
        data: Optional[Dict[str, Any]] = message.get('config')
        if data is None:
            data = {key: value for key, value in message.items() if key != 'command'}
        self.config_store.save(ChatConfig.from_dict(data))
        self.output_port.emit('configSaved', {'message': 'Configuration saved successfully.'})

    def _send_message(self, message):
        response = self.conversation.send(message.get('text', ''))
        self.output_port.emit('receiveMessage', {'message': response})

    def _get_project_files(self, message):
        files = self.file_handler.list_project_files()
        self.output_port.emit('updateProjectFiles', {'files': files})

    def _update_token_count(self, message):
        if 'selectedFiles' in message:
            self.conversation.select_files(message.get('selectedFiles') or [])
        token_count = self.conversation.estimate_tokens(message.get('input', ''))
        self.output_port.emit('updateTokenCount', {
            'tokenCount': token_count,
            'contextLimit': self.conversation.get_context_limit(),
        })

    def _get_full_context(self, message):
        self.output_port.emit('fullContext', {'context': self.conversation.get_full_context()})

    def _get_context_limit(self, message):
        self.output_port.emit('updateContextLimit', {'contextLimit': self.conversation.get_context_limit()})

    def _write_to_file(self, message):
        path = message.get('filePath') or message.get('path')
        content = message.get('code', message.get('content', ''))
        if not path:
            raise ValueError("writeToFile requires a filePath")
        self.file_handler.write_file(path, content)
        self.output_port.emit('fileWritten', {
            'filePath': path,
            'message': f"File {path} has been updated.",
        })

    def _clear_conversation(self, message):
        self.conversation.clear()
        self.output_port.emit('conversationCleared', {})
