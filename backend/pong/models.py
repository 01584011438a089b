import math
import random
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Optional

# Board and entity dimensions (pixels)
BOARD_WIDTH = 800
BOARD_HEIGHT = 600
PADDLE_WIDTH = 10
PADDLE_HEIGHT = 80
BALL_SIZE = 10  # ball is a square, x/y is its top-left corner

# Speeds (pixels per second)
INITIAL_BALL_SPEED = 200
PADDLE_SPEED = 300
INITIAL_VERTICAL_RATIO = 0.5

MAX_SCORE = 5
SPEED_INCREASE_FACTOR = 1.05
MAX_BOUNCE_ANGLE = math.radians(45)

# Paddle faces are fixed per side
PADDLE_LEFT_X = 30
PADDLE_RIGHT_X = BOARD_WIDTH - 30 - PADDLE_WIDTH


class Side(str, Enum):
    LEFT = 'left'
    RIGHT = 'right'

    @property
    def opponent(self) -> 'Side':
        return Side.RIGHT if self is Side.LEFT else Side.LEFT


class Direction(str, Enum):
    UP = 'up'
    DOWN = 'down'
    IDLE = 'idle'


class MatchStatus(str, Enum):
    WAITING = 'waiting'
    PLAYING = 'playing'
    SCORED = 'scored'
    FINISHED = 'finished'


class EndReason(str, Enum):
    COMPLETED = 'completed'
    OPPONENT_LEFT = 'opponent-left'


@dataclass
class Ball:
    x: float
    y: float
    vx: float
    vy: float

    @property
    def speed(self) -> float:
        return math.hypot(self.vx, self.vy)


@dataclass
class Paddle:
    y: float
    width: float = PADDLE_WIDTH
    height: float = PADDLE_HEIGHT


@dataclass
class Score:
    left: int = 0
    right: int = 0


@dataclass
class GameState:
    ball: Ball
    paddles: dict
    score: Score = field(default_factory=Score)
    status: MatchStatus = MatchStatus.WAITING
    winner: Optional[Side] = None
    board_width: int = BOARD_WIDTH
    board_height: int = BOARD_HEIGHT

    def to_dict(self):
        return {
            'ball': asdict(self.ball),
            'paddles': {side.value: asdict(paddle) for side, paddle in self.paddles.items()},
            'score': asdict(self.score),
            'status': self.status.value,
            'winner': self.winner.value if self.winner else None,
            'boardWidth': self.board_width,
            'boardHeight': self.board_height,
        }


def initial_ball_state(rng=None) -> Ball:
    """Centred ball heading in a random direction on each axis."""
    rng = rng or random
    return Ball(
        x=BOARD_WIDTH / 2 - BALL_SIZE / 2,
        y=BOARD_HEIGHT / 2 - BALL_SIZE / 2,
        vx=INITIAL_BALL_SPEED * (1 if rng.random() > 0.5 else -1),
        vy=INITIAL_BALL_SPEED * (1 if rng.random() > 0.5 else -1) * INITIAL_VERTICAL_RATIO,
    )


def initial_paddle_state() -> Paddle:
    return Paddle(y=BOARD_HEIGHT / 2 - PADDLE_HEIGHT / 2)


def initial_game_state(rng=None) -> GameState:
    return GameState(
        ball=initial_ball_state(rng),
        paddles={Side.LEFT: initial_paddle_state(), Side.RIGHT: initial_paddle_state()},
    )
