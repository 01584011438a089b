import time
from typing import Callable, Optional

from pong.events import ServerEvent
from pong.models import EndReason, MatchStatus, Side
from .registry import MatchRegistry, MatchRoom


class TickScheduler:
    """Single fixed-rate loop driving every active match.

    Each tick measures the real time elapsed since the previous one and
    feeds that `dt` to every match: buffered intents first, then physics,
    then a snapshot broadcast (or the end-of-match teardown).
    """

    def __init__(
        self,
        registry: MatchRegistry,
        broadcaster,
        logger,
        tick_rate: int = 60,
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep,
        heartbeat_sec: float = 0,
    ):
        self.registry = registry
        self.broadcaster = broadcaster
        self.logger = logger
        self.interval = 1.0 / tick_rate
        self.clock = clock
        self.sleep = sleep
        self.heartbeat_sec = heartbeat_sec
        self._running = False
        self._generation = 0
        self._last_tick: Optional[float] = None

    @property
    def running(self) -> bool:
        return self._running

    def start(self, socketio) -> None:
        if self._running:
            self.logger.warning("[loop-skip] game loop already running")
            return
        self._running = True
        self._generation += 1
        self._last_tick = self.clock()
        socketio.start_background_task(self.run, self._generation)
        self.logger.info(f"[loop-start] generation={self._generation} interval={self.interval * 1000:.2f}ms")

    def stop(self) -> None:
        if self._running:
            self._running = False
            self.logger.info("[loop-stop]")

    def _is_current(self, generation: int) -> bool:
        return self._running and generation == self._generation

    def run(self, generation: Optional[int] = None) -> None:
        # a loop left over from before a stop/start pair must not keep ticking
        generation = self._generation if generation is None else generation
        next_heartbeat = self.clock() + self.heartbeat_sec if self.heartbeat_sec > 0 else None
        while self._is_current(generation):
            started = self.clock()
            dt = self.tick(started)
            if next_heartbeat is not None and started >= next_heartbeat:
                self.logger.info(f"[loop-heartbeat] matches={len(self.registry)} dt={dt:.4f}s")
                next_heartbeat = started + self.heartbeat_sec
            self.sleep(max(0.0, self.interval - (self.clock() - started)))

    def tick(self, now: Optional[float] = None) -> float:
        """Advance all matches by the wall-clock time since the last tick."""
        now = self.clock() if now is None else now
        if self._last_tick is None:
            self._last_tick = now
        dt = max(0.0, now - self._last_tick)
        self._last_tick = now
        self.step(dt)
        return dt

    def step(self, dt: float) -> None:
        with self.registry.lock:
            for room in self.registry.rooms():
                try:
                    self._advance(room, dt)
                except Exception:
                    self.logger.exception(f"[match-abort] match={room.id} failed during tick")
                    self._abort(room)

    def _advance(self, room: MatchRoom, dt: float) -> None:
        game = room.game
        for side in (Side.LEFT, Side.RIGHT):
            sid = room.players.get(side)
            if sid:
                game.move_paddle(side, self.registry.intent_for(sid), dt)

        game.update(dt)

        status = game.status
        if status in (MatchStatus.PLAYING, MatchStatus.SCORED):
            self._broadcast_state(room)
        elif status == MatchStatus.FINISHED:
            self._broadcast_state(room)
            self._finish(room)

    def _broadcast_state(self, room: MatchRoom) -> None:
        snapshot = room.game.snapshot()
        for sid in room.connections():
            self.broadcaster.emit(ServerEvent.GAME_STATE, snapshot, to=sid)

    def _finish(self, room: MatchRoom) -> None:
        state = room.game.get_state()
        winner = state.winner.value if state.winner else None
        payload = {
            'winner': winner,
            'reason': EndReason.COMPLETED.value,
            'message': f"{winner.capitalize()} player wins {state.score.left}-{state.score.right}!" if winner else 'Game over.',
        }
        for sid in room.connections():
            self.broadcaster.emit(ServerEvent.MATCH_END, payload, to=sid)
        self.registry.remove_match(room.id)
        self.logger.info(
            f"[match-end] match={room.id} reason={EndReason.COMPLETED.value} winner={winner} "
            f"score={state.score.left}-{state.score.right}"
        )

    def _abort(self, room: MatchRoom) -> None:
        for sid in room.connections():
            try:
                self.broadcaster.emit(ServerEvent.ERROR, {'message': 'Match aborted due to a server error.'}, to=sid)
            except Exception:
                self.logger.exception(f"[match-abort] match={room.id} could not notify sid={sid}")
        self.registry.remove_match(room.id)
