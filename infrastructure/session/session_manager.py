# infrastructure/session/session_manager.py
import logging
import threading
import time
import uuid
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class SessionManager:
    """Registry of chat sessions, each owning its own conversation and command handler"""

    def __init__(self, session_timeout=3600, cleanup_interval=300, start_cleanup=True):
        self.sessions: Dict[str, Dict[str, Any]] = {}
        self.session_timestamps: Dict[str, float] = {}  # Track last activity time
        self.session_timeout = session_timeout
        self.cleanup_interval = cleanup_interval
        self.lock = threading.Lock()

        if start_cleanup:
            self._start_cleanup_thread()

    def create_session(self, **data) -> str:
        """Create a new session and return session ID"""
        with self.lock:
            session_id = str(uuid.uuid4())
            self.sessions[session_id] = dict(data, created_at=time.time())
            self.session_timestamps[session_id] = time.time()
        logger.info("Created session %s", session_id)
        return session_id

    def get_session(self, session_id: str) -> Optional[Dict[str, Any]]:
        """Get session data by ID and update last activity timestamp"""
        with self.lock:
            if session_id in self.sessions:
                self.session_timestamps[session_id] = time.time()
                return self.sessions.get(session_id)
            return None

    def set_session_data(self, session_id: str, key: str, value: Any):
        with self.lock:
            if session_id in self.sessions:
                self.sessions[session_id][key] = value
                self.session_timestamps[session_id] = time.time()

    def delete_session(self, session_id: str):
        with self.lock:
            self.sessions.pop(session_id, None)
            self.session_timestamps.pop(session_id, None)

    def touch_session(self, session_id: str) -> bool:
        with self.lock:
            if session_id in self.sessions:
                self.session_timestamps[session_id] = time.time()
                return True
            return False

    def cleanup_expired_sessions(self, now: Optional[float] = None):
        """Remove sessions idle for longer than the timeout"""
        current_time = now if now is not None else time.time()

        with self.lock:
            expired_sessions = [session_id for session_id, last_activity in self.session_timestamps.items()
                                if current_time - last_activity > self.session_timeout]

            for session_id in expired_sessions:
                logger.info("Removing expired session: %s", session_id)
                self.sessions.pop(session_id, None)
                self.session_timestamps.pop(session_id, None)

        return expired_sessions

    def _start_cleanup_thread(self):
        def cleanup_task():
            while True:
                time.sleep(self.cleanup_interval)
                try:
                    self.cleanup_expired_sessions()
                except Exception:
                    logger.exception("Error in session cleanup")

        cleanup_thread = threading.Thread(target=cleanup_task, daemon=True)
        cleanup_thread.start()
