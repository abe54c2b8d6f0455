from entrypoints.cli import main, to_command


def test_plain_text_is_sent():
    assert to_command("explain main.py") == {'command': 'sendMessage', 'text': 'explain main.py'}


def test_slash_commands():
    assert to_command("/select a.txt 'dir/b c.txt'") == {
        'command': 'updateTokenCount', 'input': '', 'selectedFiles': ['a.txt', 'dir/b c.txt'],
    }
    assert to_command("/tokens draft message") == {'command': 'updateTokenCount', 'input': 'draft message'}
    assert to_command("/files") == {'command': 'getProjectFiles'}
    assert to_command("/context") == {'command': 'getFullContext'}
    assert to_command("/limit") == {'command': 'getContextLimit'}
    assert to_command("/clear") == {'command': 'clearConversation'}


def test_missing_workspace_exits_with_error(tmp_path, capsys):
    assert main([str(tmp_path / "missing"), "--config", str(tmp_path / "config.json")]) == 1
    assert "Workspace not found" in capsys.readouterr().out


def test_repl_lists_files_then_quits(workspace, tmp_path, monkeypatch, capsys):
    answers = iter(["/files", "quit"])
    monkeypatch.setattr("builtins.input", lambda prompt: next(answers))

    assert main([str(workspace), "--config", str(tmp_path / "config.json")]) == 0

    out = capsys.readouterr().out
    assert "a.txt\nb.txt" in out
    assert "Goodbye!" in out
