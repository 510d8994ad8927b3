import os
import sys
import random
import pytest

# Ensure the backend root (containing the `pew` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from pew import create_app, db, socketio
from pew.services.anticheat import SubmissionValidator, UsedSessions


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    ANTICHEAT_SECRET = 'test-anticheat-secret'
    MAX_USED_SESSIONS = 10000
    MIN_GAME_DURATION_SEC = 2
    MAX_SCORE_RATE = 200
    LEADERBOARD_SIZE = 10
    CORS_ORIGINS = ['http://localhost:3000']


class FakeClock:
    """Wall clock in seconds that only moves when told to."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def validator(clock):
    return SubmissionValidator('unit-secret', used_sessions=UsedSessions(), clock=clock)


@pytest.fixture()
def rng():
    return random.Random(1234)


@pytest.fixture()
def flask_app(clock):
    application = create_app(TestConfig)
    # Deterministic durations for HTTP tests
    application.extensions['anticheat'].clock = clock
    with application.app_context():
        # Ensure models are imported so tables are created
        import pew.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


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
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass
