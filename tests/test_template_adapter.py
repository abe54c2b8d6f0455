from core.domain.models import ProjectFile
from infrastructure.adapters.prompt_builders.template_adapter import (
    TemplatePromptAdapter,
    build_manifest,
    parse_manifest,
)


def test_user_template_replaces_first_placeholder_only():
    adapter = TemplatePromptAdapter()

    rendered = adapter.render_user("hi", "<user>{message}</user> {message}")

    assert rendered == "<user>hi</user> {message}"


def test_missing_placeholder_returns_template_unchanged():
    adapter = TemplatePromptAdapter()

    assert adapter.render_user("hi", "no placeholder") == "no placeholder"
    assert adapter.render_assistant("reply", "fixed") == "fixed"
    assert adapter.render_system("base prompt", "a.txt") == "base prompt"


def test_replacement_text_is_literal():
    adapter = TemplatePromptAdapter()

    assert adapter.render_assistant("costs $& and \\1", "A: {message}") == "A: costs $& and \\1"


def test_system_template_receives_manifest():
    adapter = TemplatePromptAdapter()

    rendered = adapter.render_system("Project:\n{project-files}\nBe brief.", "a.txt\nb.txt")

    assert rendered == "Project:\na.txt\nb.txt\nBe brief."


def test_manifest_without_selection_is_file_list():
    assert build_manifest(["a.txt", "src/b.py"], []) == "a.txt\nsrc/b.py"
    assert build_manifest([], []) == ""


def test_manifest_with_selection_layout():
    manifest = build_manifest(["a.txt", "b.txt"], [ProjectFile("a.txt", "hello"), ProjectFile("b.txt", "world")])

    assert manifest == (
        "a.txt\nb.txt"
        "\n\nSelected file contents:\n\n"
        "File: `a.txt`\n```\nhello\n```\n\n"
        "---\n\n"
        "File: `b.txt`\n```\nworld\n```\n\n"
    )


def test_parse_manifest_recovers_raw_contents():
    tricky = "def f():\n    return '```'\n```python\nx = 1\n```\n\n---\ntrailing newline\n"
    selected = [ProjectFile("src/f.py", tricky), ProjectFile("empty.txt", ""), ProjectFile("notes.md", "# Notes")]

    files, contents = parse_manifest(build_manifest(["src/f.py", "empty.txt", "notes.md"], selected))

    assert files == ["src/f.py", "empty.txt", "notes.md"]
    assert contents == {"src/f.py": tricky, "empty.txt": "", "notes.md": "# Notes"}


def test_parse_manifest_without_selection():
    assert parse_manifest("a.txt\nb.txt") == (["a.txt", "b.txt"], {})
    assert parse_manifest("") == ([], {})
