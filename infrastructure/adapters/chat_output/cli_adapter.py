# infrastructure/adapters/chat_output/cli_adapter.py
from core.ports.chat_output_port import ChatOutputPort


class CLIChatAdapter(ChatOutputPort):
    def emit(self, command: str, data: dict):
        if command == 'receiveMessage':
            print(f"\nAssistant: {data['message']}")
        elif command == 'updateTokenCount':
            print(f"Tokens: {data['tokenCount']} / {data['contextLimit']}")
        elif command == 'updateContextLimit':
            print(f"Context limit: {data['contextLimit']}")
        elif command == 'fullContext':
            print(data['context'])
        elif command == 'updateProjectFiles':
            print("\n".join(data['files']) or "(no project files)")
        elif 'message' in data:
            print(data['message'])

    def display_error(self, message: str):
        print(f"\033[1;31m{message}\033[0m")

    def get_user_input(self, prompt: str) -> str:
        return input(prompt)
