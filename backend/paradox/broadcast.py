"""Fan-out of game events to every connected real-time channel.

The hub only knows channel ids and a ``sender`` callable. In the running
server the sender emits over Flask-SocketIO; tests can swap in any callable
with the same signature.
"""

import logging
import threading
from enum import Enum
from typing import Callable, Dict, Optional, Set

logger = logging.getLogger(__name__)

EVENT_MESSAGE = 'game_event'

Sender = Callable[[str, Dict], None]


class EventType(str, Enum):
    ROUND_STARTED = 'ROUND_STARTED'
    ROUND_REVEALED = 'ROUND_REVEALED'
    SUBMISSION_RECEIVED = 'SUBMISSION_RECEIVED'
    GAME_RESET = 'GAME_RESET'
    SETTINGS_UPDATED = 'SETTINGS_UPDATED'


def build_event(event_type: EventType, **payload) -> Dict:
    message = {'type': EventType(event_type).value}
    message.update(payload)
    return message


class BroadcastHub:
    """Registry of live channels plus best-effort, at-most-once publish.

    Channels that are not registered when an event is published never see
    it; there is no replay on reconnect.
    """

    def __init__(self, sender: Optional[Sender] = None, run_async: bool = False):
        self._channels: Set[str] = set()
        self._lock = threading.Lock()
        self.sender = sender
        self.run_async = run_async
        self._spawn = None

    def init_app(self, app, socketio, namespace: str = '/ws') -> None:
        def _socketio_sender(channel_id: str, message: Dict) -> None:
            socketio.emit(EVENT_MESSAGE, message, to=channel_id, namespace=namespace)

        self.sender = _socketio_sender
        self.run_async = bool(app.config.get('BROADCAST_ASYNC', True))
        self._spawn = socketio.start_background_task
        with self._lock:
            self._channels.clear()
        app.extensions['broadcast_hub'] = self

    def register(self, channel_id: str) -> None:
        with self._lock:
            self._channels.add(channel_id)
        logger.debug(f"[hub] registered channel={channel_id}")

    def unregister(self, channel_id: str) -> None:
        with self._lock:
            self._channels.discard(channel_id)
        logger.debug(f"[hub] unregistered channel={channel_id}")

    def channels(self) -> Set[str]:
        with self._lock:
            return set(self._channels)

    def publish(self, event_type: EventType, **payload) -> Dict:
        """Send one event to every channel connected right now.

        Returns the message that was (or is being) delivered. When
        ``run_async`` is set the fan-out happens in a background task and
        this call returns immediately.
        """
        message = build_event(event_type, **payload)
        targets = self.channels()
        if self.run_async and self._spawn is not None:
            try:
                self._spawn(self._deliver, targets, message)
                return message
            except Exception as exc:
                logger.warning(f"[hub] background fan-out unavailable, delivering inline: {exc}")
        self._deliver(targets, message)
        return message

    def _deliver(self, targets: Set[str], message: Dict) -> int:
        if self.sender is None:
            logger.warning(f"[hub] no sender configured, dropping {message['type']}")
            return 0
        delivered = 0
        for channel_id in targets:
            try:
                self.sender(channel_id, message)
                delivered += 1
            except Exception as exc:
                # A broken channel is dropped; it resyncs by pulling state on reconnect
                logger.warning(f"[hub] send failed channel={channel_id} type={message['type']}: {exc}")
                self.unregister(channel_id)
        return delivered
