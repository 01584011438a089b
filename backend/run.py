from pong import create_app, socketio

app = create_app()

if __name__ == '__main__':
    # Werkzeug serves websockets fine for a single-process game server
    socketio.run(
        app,
        host=app.config['HOST'],
        port=app.config['PORT'],
        use_reloader=False,
        allow_unsafe_werkzeug=True,
    )
