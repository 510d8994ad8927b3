from flask import Blueprint, current_app, jsonify, request
from sqlalchemy.exc import StatementError
from pew import db, socketio
from pew.models import NAME_MAX_STORED, insert_score, top_scores
from pew.services.anticheat import MalformedSubmission, ScoreSubmission, SubmissionValidator


api = Blueprint('api', __name__)


def get_validator() -> SubmissionValidator:
    return current_app.extensions['anticheat']


def _leaderboard():
    limit = int(current_app.config.get('LEADERBOARD_SIZE', 10))
    return [row.to_dict() for row in top_scores(limit)]


@api.route('/token', methods=['GET'])
def issue_token():
    session = get_validator().create_session_token()
    current_app.logger.info(f"[token] session={session.session_id[:8]} start={session.start_time}")
    return jsonify(session.to_dict())


@api.route('/scores', methods=['GET'])
def get_scores():
    return jsonify(_leaderboard())


@api.route('/scores', methods=['POST'])
def submit_score():
    data = request.get_json(silent=True)
    if data is None:
        return jsonify({'error': 'invalid JSON'}), 400
    try:
        submission = ScoreSubmission.from_dict(data)
    except MalformedSubmission as exc:
        current_app.logger.info(f"[submit-malformed] {exc}")
        return jsonify({'error': 'invalid submission'}), 400

    result = get_validator().validate(submission)
    if not result.valid:
        return jsonify({'error': result.error}), 403

    # Stored names are upper-case and limited to the column width
    name = submission.name.strip().upper()[:NAME_MAX_STORED]
    try:
        row = insert_score(name, submission.score, submission.wave, result.duration)
    except (StatementError, OverflowError) as exc:
        db.session.rollback()
        current_app.logger.warning(f"[score-insert-failed] session={submission.session_id[:8]} error={exc}")
        return jsonify({'error': 'could not save score'}), 400

    current_app.logger.info(f"[score-insert] id={row.id} name={row.name} score={row.score} wave={row.wave}")
    scores = _leaderboard()
    socketio.emit('leaderboard_update', {'scores': scores}, namespace='/ws')
    return jsonify({'inserted': row.to_dict(), 'scores': scores}), 201
