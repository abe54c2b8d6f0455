# entrypoints/web.py
import logging
import os

from flask import Flask, jsonify, session as flask_session
from flask_socketio import SocketIO, emit, join_room

from infrastructure.di.container import DEFAULT_SETTINGS, create_container
from infrastructure.session.session_manager import SessionManager

# Commands that may wait on the network are run off the socket handler
BACKGROUND_COMMANDS = {'sendMessage'}


class WebApp:
    """Web host: one conversation per session, driven over Socket.IO"""

    def __init__(self, settings=None, start_session_cleanup=True):
        settings = dict(DEFAULT_SETTINGS, **(settings or {}))
        settings["context"] = "web"

        self.app = Flask(__name__)
        self.app.config['SECRET_KEY'] = os.urandom(24)
        self.socketio = SocketIO(self.app, cors_allowed_origins="*", manage_session=False)

        # Set up DI container
        self.container = create_container(**settings)
        self.container.socketio.override(self.socketio)

        self.file_handler = self.container.file_handler()
        self.session_manager = SessionManager(session_timeout=settings["session_timeout"],
                                              start_cleanup=start_session_cleanup)

        self._register_routes()
        self._register_socket_events()

    def create_session(self) -> str:
        """Create a session with its own conversation and command handler"""
        conversation_uc = self.container.conversation_uc()
        session_id = self.session_manager.create_session(conversation_uc=conversation_uc)
        command_handler = self.container.command_handler(
            conversation=conversation_uc,
            output_port=self.container.chat_output(room=session_id)
        )
        self.session_manager.set_session_data(session_id, 'command_handler', command_handler)
        return session_id

    def _register_routes(self):
        """Register all HTTP routes."""

        @self.app.route('/api/health-check', methods=['GET'])
        def health_check():
            return jsonify({"status": "ok", "workspace": self.file_handler.has_workspace()})

        @self.app.route('/api/sessions', methods=['POST'])
        def create_session():
            try:
                session_id = self.create_session()
                flask_session['chat_session_id'] = session_id
                return jsonify({'session_id': session_id})
            except Exception as e:
                self.app.logger.error("Error creating session: %s", e)
                return jsonify({'error': str(e)}), 500

        @self.app.route('/api/sessions/<session_id>', methods=['DELETE'])
        def delete_session(session_id):
            self.session_manager.delete_session(session_id)
            return jsonify({'status': 'deleted'})

        @self.app.route('/api/sessions/<session_id>/project-files', methods=['GET'])
        def get_project_files(session_id):
            if self.session_manager.get_session(session_id) is None:
                return jsonify({'error': 'Invalid session'}), 404
            try:
                return jsonify({'files': self.file_handler.list_project_files()})
            except OSError as e:
                self.app.logger.error("Error getting project files: %s", e)
                return jsonify({'error': str(e)}), 500

    def _register_socket_events(self):
        """Register Socket.IO event handlers."""

        @self.socketio.on('join_session')
        def handle_join_session(data):
            session_id = (data or {}).get('session_id')
            if not session_id:
                emit('session_joined', {'status': 'error', 'message': 'Missing session ID'})
                return
            if self.session_manager.get_session(session_id) is None:
                emit('session_joined', {'status': 'error', 'message': 'Invalid session'})
                return

            join_room(session_id)
            self.app.logger.info("Client joined session: %s", session_id)
            emit('session_joined', {'status': 'success'})

        @self.socketio.on('command')
        def handle_command(data):
            data = data or {}
            session_id = data.get('session_id')
            session_data = self.session_manager.get_session(session_id) if session_id else None
            if session_data is None:
                emit('error', {'message': 'Invalid session'})
                return

            command_handler = session_data['command_handler']
            message = {key: value for key, value in data.items() if key != 'session_id'}

            if message.get('command') in BACKGROUND_COMMANDS:
                emit('message_received', {'status': 'processing'})
                self.socketio.start_background_task(command_handler.handle, message)
            else:
                command_handler.handle(message)

    def run(self, host='127.0.0.1', port=5000, debug=False):
        self.socketio.run(self.app, host=host, port=port, debug=debug)


def main():
    import argparse

    parser = argparse.ArgumentParser(description='Serve the project chat over HTTP and Socket.IO')
    parser.add_argument('--workspace', default=os.environ.get('TURBOTIME_WORKSPACE', os.getcwd()))
    parser.add_argument('--config', default=os.environ.get('TURBOTIME_CONFIG', DEFAULT_SETTINGS['config_path']))
    parser.add_argument('--tokenizer',
                        default=os.environ.get('TURBOTIME_TOKENIZER', DEFAULT_SETTINGS['tokenizer_name']))
    parser.add_argument('--host', default='127.0.0.1')
    parser.add_argument('--port', type=int, default=5000)
    parser.add_argument('--debug', action='store_true')
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO,
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    web_app = WebApp({
        "workspace_root": args.workspace,
        "config_path": args.config,
        "tokenizer_name": args.tokenizer,
    })
    if not web_app.file_handler.has_workspace():
        logging.getLogger(__name__).error("Workspace not found: %s", args.workspace)
        return 1
    web_app.run(host=args.host, port=args.port, debug=args.debug)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
