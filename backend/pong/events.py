from enum import Enum


class ClientEvent(str, Enum):
    """Events emitted by the client."""
    REQUEST_MATCH = 'request-match'
    PADDLE_MOVE = 'paddle-move'   # {direction, matchId}
    LEAVE_MATCH = 'leave-match'
    PING = 'ping'


class ServerEvent(str, Enum):
    """Events emitted by the server."""
    CONNECTED = 'connected'
    MATCH_FOUND = 'match-found'   # {matchId, side}
    GAME_STATE = 'game-state'     # full GameState snapshot
    WAITING_FOR_OPPONENT = 'waiting-for-opponent'
    OPPONENT_DISCONNECTED = 'opponent-disconnected'
    MATCH_END = 'match-end'       # {winner, reason, message}
    ERROR = 'error'
    PONG = 'pong'
