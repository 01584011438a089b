import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Frontend origin allowed for HTTP and Socket.IO (CORS)
    FRONTEND_URL = os.environ.get('FRONTEND_URL') or 'http://localhost:5173'
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3001'))
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/ws')
    # Game loop rate (Hz) and points needed to win a match
    TICK_RATE_HZ = int(os.environ.get('TICK_RATE_HZ', '60'))
    MAX_SCORE = int(os.environ.get('MAX_SCORE', '5'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Optional: heartbeat interval for game loop logs (sec). 0 disables.
    LOOP_HEARTBEAT_SEC = int(os.environ.get('LOOP_HEARTBEAT_SEC', '0'))
