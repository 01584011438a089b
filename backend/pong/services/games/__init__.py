"""Match services: simulation, matchmaking, lifecycle and the tick loop.

This package holds the game mechanics that the Socket.IO handlers call
into, keeping transport concerns separated from the match state machine.
"""

from .manager import PongManager  # noqa: F401
