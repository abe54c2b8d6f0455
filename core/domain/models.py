# core/domain/models.py
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

SYSTEM = "system"
USER = "user"
ASSISTANT = "assistant"

MESSAGE_PLACEHOLDER = "{message}"
PROJECT_FILES_PLACEHOLDER = "{project-files}"

DEFAULT_SYSTEM_MESSAGE = (
    "You are an eager senior developer who gets straight to the point in getting this codebase to work. "
    "Here are the relevant project files:\n"
    "{project-files}\n"
    "When coding up solutions, write files in their entirety, not just snippets. "
    "Precede each file's contents with the filename, like so:\n"
    "FILE:`relative/path/to/file.ext`\n"
    "```language\n"
    "file contents\n"
    "```\n"
    "Stay friendly but concise and to the point."
)


@dataclass
class ChatMessage:
    role: str
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass
class ProjectFile:
    filename: str
    content: str


# Persisted key -> dataclass field
_JSON_FIELDS = {
    "apiEndpoint": "api_endpoint",
    "apiKey": "api_key",
    "systemMessage": "system_message",
    "userMessageTemplate": "user_message_template",
    "assistantMessageTemplate": "assistant_message_template",
    "maxTokens": "max_tokens",
    "contextLimit": "context_limit",
    "temperature": "temperature",
    "topP": "top_p",
    "frequencyPenalty": "frequency_penalty",
    "presencePenalty": "presence_penalty",
    "stopSequences": "stop_sequences",
    "modelName": "model_name",
    "responseFormat": "response_format",
}

_INT_FIELDS = {"max_tokens", "context_limit"}
_FLOAT_FIELDS = {"temperature", "top_p", "frequency_penalty", "presence_penalty"}


@dataclass
class ChatConfig:
    """Snapshot of the user-editable chat settings.

    Loaded fresh from the config store at the start of every operation that
    needs it, so edits take effect on the next message.
    """
    api_endpoint: str = ""
    api_key: Optional[str] = None
    system_message: str = DEFAULT_SYSTEM_MESSAGE
    user_message_template: str = MESSAGE_PLACEHOLDER
    assistant_message_template: str = MESSAGE_PLACEHOLDER
    max_tokens: int = 8192
    context_limit: int = 32768
    temperature: float = 0.7
    top_p: float = 1.0
    frequency_penalty: float = 0.0
    presence_penalty: float = 0.0
    stop_sequences: List[str] = field(default_factory=list)
    model_name: str = "gpt-4o-mini"
    response_format: str = "text"

    @property
    def is_complete(self) -> bool:
        return bool(self.api_endpoint and self.api_endpoint.strip())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChatConfig":
        """Build a config from the persisted camelCase record, merged over defaults"""
        values: Dict[str, Any] = {}
        if "maxResponseTokens" in data and "maxTokens" not in data:
            data = dict(data, maxTokens=data["maxResponseTokens"])

        for json_key, attr in _JSON_FIELDS.items():
            if json_key not in data or data[json_key] is None:
                continue
            value = data[json_key]
            if attr in _INT_FIELDS:
                value = int(float(value))
            elif attr in _FLOAT_FIELDS:
                value = float(value)
            elif attr == "stop_sequences":
                value = _normalize_stop_sequences(value)
            elif attr == "api_key":
                value = str(value) or None
            else:
                value = str(value)
            values[attr] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        raw = asdict(self)
        return {json_key: raw[attr] for json_key, attr in _JSON_FIELDS.items()}


def _normalize_stop_sequences(value) -> List[str]:
    if isinstance(value, str):
        value = value.split(",")
    return [str(item).strip() for item in value if str(item).strip()]
