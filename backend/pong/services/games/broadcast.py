from pong.events import ServerEvent


class SocketIOBroadcaster:
    """Fire-and-forget delivery of server events to single connections.

    Every Socket.IO connection sits in a room named after its own sid, so
    addressing a player is just `to=sid`. Safe to call from the tick loop,
    which runs outside any request context.
    """

    def __init__(self, socketio, namespace: str = '/ws'):
        self.socketio = socketio
        self.namespace = namespace

    def emit(self, event: ServerEvent, payload, to: str) -> None:
        self.socketio.emit(event.value, payload, to=to, namespace=self.namespace)
