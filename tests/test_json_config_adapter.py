import json

from core.domain.models import DEFAULT_SYSTEM_MESSAGE, ChatConfig
from infrastructure.adapters.config_stores.json_config_adapter import JsonConfigAdapter


def test_missing_file_yields_defaults(tmp_path):
    config = JsonConfigAdapter(str(tmp_path / "absent.json")).load()

    assert config == ChatConfig()
    assert config.api_endpoint == ""
    assert config.is_complete is False
    assert config.system_message == DEFAULT_SYSTEM_MESSAGE
    assert config.user_message_template == "{message}"
    assert config.context_limit == 32768


def test_invalid_json_yields_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    assert JsonConfigAdapter(str(path)).load() == ChatConfig()


def test_partial_record_is_merged_over_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "apiEndpoint": "https://api.example.com/v1/chat/completions",
        "maxResponseTokens": "512",
        "temperature": "0.1",
        "stopSequences": "###, END ,",
        "unknownKey": True,
    }), encoding="utf-8")

    config = JsonConfigAdapter(str(path)).load()

    assert config.is_complete is True
    assert config.max_tokens == 512
    assert config.temperature == 0.1
    assert config.stop_sequences == ["###", "END"]
    assert config.model_name == "gpt-4o-mini"


def test_save_writes_camel_case_record_and_reloads(tmp_path):
    path = tmp_path / "nested" / "config.json"
    store = JsonConfigAdapter(str(path))
    config = ChatConfig(api_endpoint="http://localhost:8080/v1/chat/completions", api_key="k",
                        context_limit=100, stop_sequences=["</s>"])

    store.save(config)

    record = json.loads(path.read_text(encoding="utf-8"))
    assert record["apiEndpoint"] == "http://localhost:8080/v1/chat/completions"
    assert record["contextLimit"] == 100
    assert record["stopSequences"] == ["</s>"]
    assert store.load() == config


def test_load_is_fresh_every_call(tmp_path):
    store = JsonConfigAdapter(str(tmp_path / "config.json"))
    store.save(ChatConfig(model_name="first"))
    assert store.load().model_name == "first"

    store.save(ChatConfig(model_name="second"))

    assert store.load().model_name == "second"
