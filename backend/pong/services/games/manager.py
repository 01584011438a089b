import time

from pong.models import MAX_SCORE
from .lifecycle import ConnectionLifecycle
from .matchmaker import Matchmaker
from .registry import MatchRegistry
from .scheduler import TickScheduler


class PongManager:
    """Wires one registry into the matchmaker, lifecycle and tick loop."""

    def __init__(
        self,
        broadcaster,
        logger,
        tick_rate: int = 60,
        max_score: int = MAX_SCORE,
        clock=time.perf_counter,
        sleep=time.sleep,
        heartbeat_sec: float = 0,
        rng=None,
    ):
        self.registry = MatchRegistry()
        self.matchmaker = Matchmaker(self.registry, broadcaster, logger, max_score=max_score, rng=rng)
        self.lifecycle = ConnectionLifecycle(self.registry, broadcaster, logger)
        self.scheduler = TickScheduler(
            self.registry,
            broadcaster,
            logger,
            tick_rate=tick_rate,
            clock=clock,
            sleep=sleep,
            heartbeat_sec=heartbeat_sec,
        )
