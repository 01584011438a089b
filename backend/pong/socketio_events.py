from flask import current_app, request
from flask_socketio import emit

from pong import socketio
from pong.events import ClientEvent, ServerEvent
from pong.services.games import PongManager


def _manager() -> PongManager:
    return current_app.extensions['pong']


def _get_sid() -> str:
    # request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def handle_connect():
    current_app.logger.info(f"[connect] sid={_get_sid()}")
    emit(ServerEvent.CONNECTED.value, {'message': 'Connected to Pong server'})


def handle_disconnect(reason=None):
    sid = _get_sid()
    current_app.logger.info(f"[disconnect] sid={sid} reason={reason}")
    _manager().lifecycle.disconnect(sid)


def handle_request_match(data=None):
    _manager().matchmaker.request_match(_get_sid())


def handle_paddle_move(data=None):
    _manager().lifecycle.paddle_move(_get_sid(), data)


def handle_leave_match(data=None):
    sid = _get_sid()
    current_app.logger.info(f"[leave] sid={sid}")
    _manager().lifecycle.leave(sid)


def handle_ping(data=None):
    emit(ServerEvent.PONG.value, data or {})


def register_socketio_handlers(namespace: str = '/ws') -> None:
    """Register Socket.IO event handlers on the game namespace."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event(ClientEvent.REQUEST_MATCH.value, handle_request_match, namespace=namespace)
    socketio.on_event(ClientEvent.PADDLE_MOVE.value, handle_paddle_move, namespace=namespace)
    socketio.on_event(ClientEvent.LEAVE_MATCH.value, handle_leave_match, namespace=namespace)
    socketio.on_event(ClientEvent.PING.value, handle_ping, namespace=namespace)
