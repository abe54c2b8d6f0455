# infrastructure/adapters/chat_output/web_adapter.py
from typing import Any, Dict, Optional

from core.ports.chat_output_port import ChatOutputPort


class WebChatAdapter(ChatOutputPort):
    """Pushes outbound events to the Socket.IO room of one session"""

    def __init__(self, socketio, room: Optional[str] = None):
        self.socketio = socketio
        self.room = room

    def emit(self, command: str, data: Dict[str, Any]):
        self.socketio.emit('message', dict(data, command=command), room=self.room)

    def display_error(self, message: str):
        self.socketio.emit('error', {'message': message}, room=self.room)
