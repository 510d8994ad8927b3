from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import random
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    origins = flask_app.config.get('CORS_ORIGINS') or []
    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=origins)
    socketio.init_app(flask_app, cors_allowed_origins=origins)

    # One validator (and replay guard) per app instance
    from pew.services.anticheat import SubmissionValidator, UsedSessions
    flask_app.extensions['anticheat'] = SubmissionValidator(
        secret=flask_app.config['ANTICHEAT_SECRET'],
        used_sessions=UsedSessions(capacity=int(flask_app.config.get('MAX_USED_SESSIONS', 10000))),
        min_duration=float(flask_app.config.get('MIN_GAME_DURATION_SEC', 2)),
        max_score_rate=float(flask_app.config.get('MAX_SCORE_RATE', 200)),
    )

    from pew.main import main
    flask_app.register_blueprint(main)

    from pew.api.scores import api
    flask_app.register_blueprint(api, url_prefix='/api')

    from pew.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates the database."""
        import pew.models  # noqa: F401
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            click.echo('Database has been reset!')

    @click.command('simulate')
    @click.option('--frames', default=3600, show_default=True, help='Frames to run at 60 FPS.')
    @click.option('--seed', default=None, type=int, help='Seed for spawn and drop rolls.')
    def simulate_command(frames, seed):
        """Runs a headless game with a scripted strafing player."""
        from pew.game.simulate import run_scripted_game
        state = run_scripted_game(frames=frames, rng=random.Random(seed))
        click.echo(
            f"phase={state.phase.value} wave={state.wave.current} score={state.score} "
            f"lives={state.player.lives} time={state.time:.1f}s"
        )

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(simulate_command)

    return flask_app
