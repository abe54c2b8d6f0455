import pytest

from application.use_cases.conversation import ConversationUseCase
from application.use_cases.token_budget import TokenBudgetEstimator
from core.domain.models import ChatConfig
from core.ports.chat_output_port import ChatOutputPort
from core.ports.response_generator_port import ResponseGeneratorPort
from core.ports.tokenizer_port import TokenizerPort
from infrastructure.adapters.config_stores.json_config_adapter import JsonConfigAdapter
from infrastructure.adapters.file_handlers.local_file_adapter import LocalFileAdapter
from infrastructure.adapters.prompt_builders.template_adapter import TemplatePromptAdapter

ENDPOINT = "http://llm.test/v1/chat/completions"


class WordTokenizer(TokenizerPort):
    """Whitespace tokenizer, deterministic and download-free"""

    def count(self, text: str) -> int:
        return len(text.split())


class FakeCompletion(ResponseGeneratorPort):
    def __init__(self, replies=None, error=None):
        self.replies = list(replies or [])
        self.error = error
        self.calls = []

    def complete(self, endpoint, payload, api_key=None):
        self.calls.append({"endpoint": endpoint, "payload": payload, "api_key": api_key})
        if self.error is not None:
            raise self.error
        return self.replies.pop(0) if self.replies else "ok"


class RecordingOutput(ChatOutputPort):
    def __init__(self):
        self.events = []
        self.errors = []

    def emit(self, command, data):
        self.events.append((command, data))

    def display_error(self, message):
        self.errors.append(message)

    def last(self, command):
        matching = [data for name, data in self.events if name == command]
        return matching[-1] if matching else None


@pytest.fixture
def workspace(tmp_path):
    root = tmp_path / "project"
    root.mkdir()
    (root / "a.txt").write_text("hello", encoding="utf-8")
    (root / "b.txt").write_text("world", encoding="utf-8")
    return root


@pytest.fixture
def config_store(tmp_path):
    store = JsonConfigAdapter(str(tmp_path / "config.json"))
    store.save(ChatConfig(
        api_endpoint=ENDPOINT,
        api_key="sk-test",
        system_message="Files:\n{project-files}",
    ))
    return store


@pytest.fixture
def file_handler(workspace):
    return LocalFileAdapter(str(workspace))


@pytest.fixture
def completion():
    return FakeCompletion(replies=["first reply", "second reply", "third reply"])


@pytest.fixture
def conversation(file_handler, config_store, completion):
    return ConversationUseCase(
        file_handler=file_handler,
        prompt_builder=TemplatePromptAdapter(),
        response_generator=completion,
        config_store=config_store,
        token_estimator=TokenBudgetEstimator(WordTokenizer()),
    )


def update_config(store, **changes):
    config = store.load()
    for key, value in changes.items():
        setattr(config, key, value)
    store.save(config)
