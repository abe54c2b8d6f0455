# entrypoints/cli.py
import argparse
import logging
import os
import shlex

from infrastructure.di.container import DEFAULT_SETTINGS, create_container

EXIT_WORDS = {"exit", "quit", "bye", "/quit", "/exit"}

HELP_TEXT = """Commands:
  /select <file> [<file> ...]   choose project files to include (no args clears)
  /files                        list project files
  /tokens [text]                estimate tokens for the next message
  /context                      show the fully rendered context
  /limit                        show the configured context limit
  /clear                        start a new conversation
  /quit                         leave"""


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Chat with a completion endpoint about a project')
    parser.add_argument('workspace', nargs='?',
                        default=os.environ.get('TURBOTIME_WORKSPACE', os.getcwd()),
                        help='Project root to read files from')
    parser.add_argument('--config', default=os.environ.get('TURBOTIME_CONFIG', DEFAULT_SETTINGS['config_path']),
                        help='Path of the JSON chat settings file')
    parser.add_argument('--tokenizer',
                        default=os.environ.get('TURBOTIME_TOKENIZER', DEFAULT_SETTINGS['tokenizer_name']),
                        help='Hugging Face tokenizer used for token estimates')
    parser.add_argument('--ignore-file', default=DEFAULT_SETTINGS['ignore_file'])
    parser.add_argument('--verbose', action='store_true')
    return parser.parse_args(argv)


def to_command(user_input: str) -> dict:
    """Translate one REPL line into a UI command message"""
    if not user_input.startswith('/'):
        return {'command': 'sendMessage', 'text': user_input}

    name, _, rest = user_input[1:].partition(' ')
    if name == 'select':
        return {'command': 'updateTokenCount', 'input': '', 'selectedFiles': shlex.split(rest)}
    if name == 'files':
        return {'command': 'getProjectFiles'}
    if name == 'tokens':
        return {'command': 'updateTokenCount', 'input': rest}
    if name == 'context':
        return {'command': 'getFullContext'}
    if name == 'limit':
        return {'command': 'getContextLimit'}
    if name == 'clear':
        return {'command': 'clearConversation'}
    return {'command': name}


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    container = create_container(
        context="cli",
        workspace_root=args.workspace,
        config_path=args.config,
        ignore_file=args.ignore_file,
        tokenizer_name=args.tokenizer,
    )

    file_handler = container.file_handler()
    output_port = container.chat_output()
    command_handler = container.command_handler(output_port=output_port)

    if not file_handler.has_workspace():
        output_port.display_error(f"Workspace not found: {args.workspace}")
        return 1

    output_port.emit('info', {'message': f"Chatting about {file_handler.workspace_root}\n{HELP_TEXT}"})

    while True:
        try:
            user_input = output_port.get_user_input("\nYou: ").strip()
        except (EOFError, KeyboardInterrupt):
            break
        if not user_input:
            continue
        if user_input.lower() in EXIT_WORDS:
            break
        if user_input in ('/help', '/?'):
            output_port.emit('info', {'message': HELP_TEXT})
            continue

        command_handler.handle(to_command(user_input))

    output_port.emit('info', {'message': "Goodbye!"})
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
