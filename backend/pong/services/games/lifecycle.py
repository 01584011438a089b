from pong.events import ServerEvent
from pong.models import Direction, EndReason
from .registry import MatchRegistry


class ConnectionLifecycle:
    """Binds and unbinds connections as they send input, leave or drop.

    A departure while in a match is a forfeit: the opponent is told once and
    the whole match is torn down. There is no pause or resume.
    """

    def __init__(self, registry: MatchRegistry, broadcaster, logger):
        self.registry = registry
        self.broadcaster = broadcaster
        self.logger = logger

    def disconnect(self, sid: str) -> None:
        with self.registry.lock:
            room = self.registry.match_for(sid)
            if room:
                opponent = room.opponent_of(sid)
                if opponent:
                    self.broadcaster.emit(
                        ServerEvent.OPPONENT_DISCONNECTED,
                        {'message': 'Your opponent disconnected. Game ended.'},
                        to=opponent,
                    )
                self.registry.remove_match(room.id)
                self.logger.info(
                    f"[match-end] match={room.id} reason={EndReason.OPPONENT_LEFT.value} departed={sid}"
                )
            elif self.registry.waiting == sid:
                self.registry.waiting = None
                self.logger.info(f"[waiting-cleared] sid={sid}")
            self.registry.unbind(sid)

    def leave(self, sid: str) -> None:
        self.disconnect(sid)

    def paddle_move(self, sid: str, data) -> bool:
        data = data if isinstance(data, dict) else {}
        match_id = data.get('matchId')
        try:
            direction = Direction(data.get('direction'))
        except ValueError:
            direction = None

        with self.registry.lock:
            bound_match = self.registry.match_id_for(sid)
            side = self.registry.side_for(sid)
            if direction is None or not bound_match or bound_match != match_id or side is None:
                self.logger.warning(
                    f"[invalid-move] sid={sid} match={match_id} bound={bound_match} direction={data.get('direction')}"
                )
                self.broadcaster.emit(ServerEvent.ERROR, {'message': 'Invalid game or player state.'}, to=sid)
                return False
            self.registry.set_intent(sid, direction)
            return True
