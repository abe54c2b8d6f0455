# infrastructure/di/container.py
from dependency_injector import containers, providers

from application.use_cases.commands import ChatCommandHandler
from application.use_cases.conversation import ConversationUseCase
from application.use_cases.token_budget import TokenBudgetEstimator
from infrastructure.adapters.chat_output.cli_adapter import CLIChatAdapter
from infrastructure.adapters.chat_output.web_adapter import WebChatAdapter
from infrastructure.adapters.config_stores.json_config_adapter import JsonConfigAdapter
from infrastructure.adapters.file_handlers.local_file_adapter import LocalFileAdapter
from infrastructure.adapters.prompt_builders.template_adapter import TemplatePromptAdapter
from infrastructure.adapters.response_generators.http_completion_adapter import HttpCompletionAdapter
from infrastructure.adapters.tokenizers.huggingface_adapter import HuggingFaceTokenizerAdapter

DEFAULT_SETTINGS = {
    "context": "cli",
    "workspace_root": None,
    "config_path": "config.json",
    "ignore_file": ".gitignore",
    "tokenizer_name": "Xenova/gpt-4o",
    "request_timeout": 120.0,
    "session_timeout": 3600,
}


class Container(containers.DeclarativeContainer):
    config = providers.Configuration()

    # Optional dependencies
    socketio = providers.Dependency(instance_of=object)

    # Adapters
    file_handler = providers.Singleton(
        LocalFileAdapter,
        workspace_root=config.workspace_root,
        ignore_file=config.ignore_file
    )

    config_store = providers.Singleton(
        JsonConfigAdapter,
        config_path=config.config_path
    )

    tokenizer = providers.Singleton(
        HuggingFaceTokenizerAdapter,
        tokenizer_name=config.tokenizer_name
    )

    token_estimator = providers.Factory(TokenBudgetEstimator, tokenizer=tokenizer)
    prompt_builder = providers.Factory(TemplatePromptAdapter)
    response_generator = providers.Factory(HttpCompletionAdapter, timeout=config.request_timeout)

    chat_output = providers.Selector(
        config.context,
        cli=providers.Factory(CLIChatAdapter),
        web=providers.Factory(WebChatAdapter, socketio=socketio)
    )

    # Use Cases
    conversation_uc = providers.Factory(
        ConversationUseCase,
        file_handler=file_handler,
        prompt_builder=prompt_builder,
        response_generator=response_generator,
        config_store=config_store,
        token_estimator=token_estimator
    )

    command_handler = providers.Factory(
        ChatCommandHandler,
        conversation=conversation_uc,
        file_handler=file_handler,
        config_store=config_store,
        output_port=chat_output
    )


def create_container(**settings) -> Container:
    container = Container()
    container.config.from_dict(dict(DEFAULT_SETTINGS, **settings))
    return container
