import copy
import math
import random

from pong.models import (
    BALL_SIZE,
    BOARD_HEIGHT,
    BOARD_WIDTH,
    MAX_BOUNCE_ANGLE,
    MAX_SCORE,
    PADDLE_LEFT_X,
    PADDLE_RIGHT_X,
    PADDLE_SPEED,
    PADDLE_WIDTH,
    SPEED_INCREASE_FACTOR,
    Direction,
    GameState,
    MatchStatus,
    Side,
    initial_ball_state,
    initial_game_state,
    initial_paddle_state,
)


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


class PongGame:
    """Authoritative simulation for a single match.

    The ball and paddles only move through `update` and `move_paddle`;
    everything handed out by `get_state` / `snapshot` is a copy.
    """

    def __init__(self, max_score: int = MAX_SCORE, rng=None):
        self.max_score = max_score
        self._rng = rng or random.Random()
        self.state = initial_game_state(self._rng)

    @property
    def status(self) -> MatchStatus:
        return self.state.status

    def get_state(self) -> GameState:
        return copy.deepcopy(self.state)

    def snapshot(self) -> dict:
        return self.state.to_dict()

    def start(self) -> None:
        if self.state.status == MatchStatus.WAITING:
            self.state.status = MatchStatus.PLAYING

    def move_paddle(self, side: Side, direction: Direction, dt: float) -> None:
        if self.state.status != MatchStatus.PLAYING:
            return
        paddle = self.state.paddles[side]
        if direction == Direction.UP:
            paddle.y -= PADDLE_SPEED * dt
        elif direction == Direction.DOWN:
            paddle.y += PADDLE_SPEED * dt
        paddle.y = clamp(paddle.y, 0, BOARD_HEIGHT - paddle.height)

    def update(self, dt: float) -> None:
        if self.state.status != MatchStatus.PLAYING:
            return

        ball = self.state.ball
        ball.x += ball.vx * dt
        ball.y += ball.vy * dt

        self._bounce_off_walls()
        self._bounce_off_paddle(Side.LEFT)
        self._bounce_off_paddle(Side.RIGHT)
        self._check_scoring()

    def _bounce_off_walls(self) -> None:
        ball = self.state.ball
        if ball.y <= 0:
            ball.y = 0
            ball.vy = abs(ball.vy)
        elif ball.y + BALL_SIZE >= BOARD_HEIGHT:
            ball.y = BOARD_HEIGHT - BALL_SIZE
            ball.vy = -abs(ball.vy)

    def _bounce_off_paddle(self, side: Side) -> None:
        ball = self.state.ball
        paddle = self.state.paddles[side]

        if side is Side.LEFT:
            face_x = PADDLE_LEFT_X + PADDLE_WIDTH
            # moving left, leading edge at or past the face, not yet off the board
            reached = ball.vx < 0 and ball.x <= face_x and ball.x + BALL_SIZE >= 0
        else:
            face_x = PADDLE_RIGHT_X
            reached = ball.vx > 0 and ball.x + BALL_SIZE >= face_x and ball.x <= BOARD_WIDTH
        if not reached:
            return

        overlaps = ball.y + BALL_SIZE >= paddle.y and ball.y <= paddle.y + paddle.height
        if not overlaps:
            return

        half_height = paddle.height / 2
        hit_offset = clamp(((ball.y + BALL_SIZE / 2) - (paddle.y + half_height)) / half_height, -1.0, 1.0)
        bounce_angle = hit_offset * MAX_BOUNCE_ANGLE
        speed = ball.speed * SPEED_INCREASE_FACTOR

        ball.vx = speed * math.cos(bounce_angle)
        ball.vy = speed * math.sin(bounce_angle)
        if side is Side.LEFT:
            ball.x = face_x
            ball.vx = abs(ball.vx)
        else:
            ball.x = face_x - BALL_SIZE
            ball.vx = -abs(ball.vx)

    def _check_scoring(self) -> None:
        ball = self.state.ball
        if ball.x + BALL_SIZE < 0:
            scorer = Side.RIGHT
        elif ball.x > BOARD_WIDTH:
            scorer = Side.LEFT
        else:
            return

        self.state.status = MatchStatus.SCORED
        if scorer is Side.LEFT:
            self.state.score.left += 1
        else:
            self.state.score.right += 1

        self.state.ball = initial_ball_state(self._rng)
        self.state.paddles = {Side.LEFT: initial_paddle_state(), Side.RIGHT: initial_paddle_state()}
        self.state.status = MatchStatus.PLAYING
        self._check_game_end()

    def _check_game_end(self) -> None:
        score = self.state.score
        if score.left >= self.max_score or score.right >= self.max_score:
            self.state.status = MatchStatus.FINISHED
            self.state.winner = Side.LEFT if score.left >= self.max_score else Side.RIGHT
