import random
import string
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from pong.models import Direction, Side
from .physics import PongGame


@dataclass
class MatchRoom:
    id: str
    game: PongGame
    players: Dict[Side, Optional[str]] = field(default_factory=dict)

    def opponent_of(self, sid: str) -> Optional[str]:
        for side, player in self.players.items():
            if player == sid:
                return self.players.get(side.opponent)
        return None

    def connections(self) -> List[str]:
        return [sid for sid in self.players.values() if sid]


def generate_match_id(taken, length=8):
    """Generate a unique, short match code."""
    while True:
        code = ''.join(random.choices(string.ascii_uppercase + string.digits, k=length))
        if code not in taken:
            return code


class MatchRegistry:
    """In-memory bookkeeping shared by matchmaker, lifecycle and scheduler.

    Holds the active rooms, the connection -> (match, side) bindings, the
    single waiting slot and the per-connection intent buffer. Socket
    handlers and the tick loop run on different threads, so callers hold
    `lock` around any multi-step change.
    """

    def __init__(self):
        self.lock = threading.RLock()
        self.waiting: Optional[str] = None
        self._rooms: Dict[str, MatchRoom] = {}
        self._player_to_match: Dict[str, str] = {}
        self._player_to_side: Dict[str, Side] = {}
        self._intents: Dict[str, Direction] = {}

    def __len__(self):
        return len(self._rooms)

    def rooms(self) -> List[MatchRoom]:
        return list(self._rooms.values())

    def get(self, match_id: str) -> Optional[MatchRoom]:
        return self._rooms.get(match_id)

    def create_match(self, left_sid: str, right_sid: str, game: PongGame) -> MatchRoom:
        room = MatchRoom(
            id=generate_match_id(self._rooms),
            game=game,
            players={Side.LEFT: left_sid, Side.RIGHT: right_sid},
        )
        self._rooms[room.id] = room
        for side, sid in room.players.items():
            self._player_to_match[sid] = room.id
            self._player_to_side[sid] = side
        return room

    def is_bound(self, sid: str) -> bool:
        return sid in self._player_to_match

    def match_id_for(self, sid: str) -> Optional[str]:
        return self._player_to_match.get(sid)

    def match_for(self, sid: str) -> Optional[MatchRoom]:
        match_id = self._player_to_match.get(sid)
        return self._rooms.get(match_id) if match_id else None

    def side_for(self, sid: str) -> Optional[Side]:
        return self._player_to_side.get(sid)

    def set_intent(self, sid: str, direction: Direction) -> None:
        self._intents[sid] = direction

    def intent_for(self, sid: str) -> Direction:
        return self._intents.get(sid, Direction.IDLE)

    def clear_intent(self, sid: str) -> None:
        self._intents.pop(sid, None)

    def unbind(self, sid: str) -> None:
        self._player_to_match.pop(sid, None)
        self._player_to_side.pop(sid, None)
        self.clear_intent(sid)

    def remove_match(self, match_id: str) -> Optional[MatchRoom]:
        room = self._rooms.pop(match_id, None)
        if not room:
            return None
        for sid in room.connections():
            # a connection may already be bound to a newer match
            if self._player_to_match.get(sid) == match_id:
                self.unbind(sid)
        return room
