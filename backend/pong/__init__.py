from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = [flask_app.config.get('FRONTEND_URL', 'http://localhost:5173')]
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from pong.main import main
    flask_app.register_blueprint(main)

    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/ws')

    from pong.services.games import PongManager
    from pong.services.games.broadcast import SocketIOBroadcaster
    manager = PongManager(
        SocketIOBroadcaster(socketio, namespace),
        flask_app.logger,
        tick_rate=int(flask_app.config.get('TICK_RATE_HZ', 60)),
        max_score=int(flask_app.config.get('MAX_SCORE', 5)),
        sleep=socketio.sleep,
        heartbeat_sec=int(flask_app.config.get('LOOP_HEARTBEAT_SEC', 0)),
    )
    flask_app.extensions['pong'] = manager

    # Register Socket.IO event handlers
    from pong.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace)

    # The loop is driven by hand in tests
    if not flask_app.config.get('TESTING') or flask_app.config.get('ENABLE_SCHEDULER_IN_TESTS'):
        manager.scheduler.start(socketio)

    return flask_app
