import logging
import os
import random
import sys
import pytest

# Ensure the backend root (containing the `pong` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from pong import create_app, socketio
from pong.services.games import PongManager


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    FRONTEND_URL = 'http://localhost:5173'
    SOCKETIO_NAMESPACE = '/ws'
    TICK_RATE_HZ = 60
    MAX_SCORE = 5
    LOG_LEVEL = 'DEBUG'


class RecordingBroadcaster:
    """Stands in for Socket.IO delivery; keeps every emit in order."""

    def __init__(self):
        self.sent = []

    def emit(self, event, payload, to):
        self.sent.append((to, event, payload))

    def events_for(self, sid, event=None):
        return [p for (to, e, p) in self.sent if to == sid and (event is None or e == event)]

    def names_for(self, sid):
        return [e for (to, e, _) in self.sent if to == sid]

    def clear(self):
        self.sent.clear()


class FakeClock:
    def __init__(self, start=100.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    if test_client.is_connected('/ws'):
        test_client.disconnect(namespace='/ws')


@pytest.fixture()
def recorder():
    return RecordingBroadcaster()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def manager(recorder, clock):
    return PongManager(
        recorder,
        logging.getLogger('pong.tests'),
        clock=clock,
        rng=random.Random(1234),
    )
