from flask import current_app, request
from flask_socketio import emit

from paradox import hub, socketio

NAMESPACE = '/ws'


def _get_sid() -> str:
    # request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def handle_connect():
    hub.register(_get_sid())
    current_app.logger.info(f"[ws] connected sid={_get_sid()} channels={len(hub.channels())}")
    emit('connected', {'message': f'Connected to {NAMESPACE}'})


def handle_disconnect(*args):
    hub.unregister(_get_sid())
    current_app.logger.info(f"[ws] disconnected sid={_get_sid()}")


def handle_ping(data=None):
    emit('pong', data or {})


def register_socketio_handlers() -> None:
    """Register Socket.IO event handlers on namespace '/ws'.

    A freshly (re)connected socket gets no replay of earlier events; clients
    re-pull current round, teams and submissions over HTTP after connecting.
    """
    socketio.on_event('connect', handle_connect, namespace=NAMESPACE)
    socketio.on_event('disconnect', handle_disconnect, namespace=NAMESPACE)
    socketio.on_event('ping', handle_ping, namespace=NAMESPACE)
