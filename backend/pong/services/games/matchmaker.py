from typing import Optional

from pong.events import ServerEvent
from pong.models import MAX_SCORE
from .physics import PongGame
from .registry import MatchRegistry, MatchRoom


class Matchmaker:
    """Pairs connections first-come first-served into two-player matches.

    There is a single waiting slot: the first requester waits, the next one
    is paired with them. The waiter always plays `left`.
    """

    def __init__(self, registry: MatchRegistry, broadcaster, logger, max_score: int = MAX_SCORE, rng=None):
        self.registry = registry
        self.broadcaster = broadcaster
        self.logger = logger
        self.max_score = max_score
        self.rng = rng

    def request_match(self, sid: str) -> Optional[MatchRoom]:
        with self.registry.lock:
            if self.registry.is_bound(sid):
                self.logger.warning(f"[match-request] sid={sid} already in match={self.registry.match_id_for(sid)}")
                self.broadcaster.emit(ServerEvent.ERROR, {'message': 'You are already in a match.'}, to=sid)
                return None

            waiting = self.registry.waiting
            if waiting is None or waiting == sid:
                self.registry.waiting = sid
                self.logger.info(f"[waiting] sid={sid}")
                self.broadcaster.emit(ServerEvent.WAITING_FOR_OPPONENT, {'message': 'Waiting for opponent...'}, to=sid)
                return None

            self.registry.waiting = None
            game = PongGame(max_score=self.max_score, rng=self.rng)
            room = self.registry.create_match(waiting, sid, game)
            game.start()
            self.logger.info(f"[match-start] match={room.id} left={waiting} right={sid}")

            for side, player in room.players.items():
                self.broadcaster.emit(ServerEvent.MATCH_FOUND, {'matchId': room.id, 'side': side.value}, to=player)
            snapshot = game.snapshot()
            for player in room.connections():
                self.broadcaster.emit(ServerEvent.GAME_STATE, snapshot, to=player)
            return room
