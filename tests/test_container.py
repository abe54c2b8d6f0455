from dependency_injector import providers

from conftest import FakeCompletion, RecordingOutput, WordTokenizer
from infrastructure.adapters.file_handlers.local_file_adapter import LocalFileAdapter
from infrastructure.di.container import create_container


def make_container(workspace, config_store, replies=None):
    container = create_container(workspace_root=str(workspace), config_path=config_store.config_path)
    container.tokenizer.override(providers.Object(WordTokenizer()))
    container.response_generator.override(providers.Object(FakeCompletion(replies=replies)))
    return container


def test_wires_a_working_command_handler(workspace, config_store):
    container = make_container(workspace, config_store, replies=["wired reply"])
    output = RecordingOutput()

    handler = container.command_handler(output_port=output)
    handler.handle({'command': 'sendMessage', 'text': 'hi'})

    assert output.last('receiveMessage') == {'message': 'wired reply'}


def test_file_handler_uses_configured_workspace(workspace, config_store):
    container = make_container(workspace, config_store)

    file_handler = container.file_handler()

    assert isinstance(file_handler, LocalFileAdapter)
    assert file_handler.list_project_files() == ['a.txt', 'b.txt']


def test_conversations_do_not_share_state(workspace, config_store):
    container = make_container(workspace, config_store)

    first = container.conversation_uc()
    second = container.conversation_uc()
    first.select_files(['a.txt'])
    first.send('hi')

    assert len(second.get_history()) == 1
    assert second.selected_files == []
