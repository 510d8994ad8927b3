from datetime import datetime, timezone
from typing import List

from pew import db

NAME_MAX_STORED = 6


def _utcnow():
    return datetime.now(timezone.utc)


class Score(db.Model):
    __tablename__ = 'scores'
    # Hard limits enforced by the database regardless of application checks
    __table_args__ = (
        db.CheckConstraint(f'length(name) BETWEEN 1 AND {NAME_MAX_STORED}', name='ck_scores_name_length'),
        db.CheckConstraint('score >= 0', name='ck_scores_score_nonneg'),
        db.CheckConstraint('wave >= 1', name='ck_scores_wave_min'),
        db.CheckConstraint('duration > 0', name='ck_scores_duration_pos'),
    )
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(NAME_MAX_STORED), nullable=False)
    score = db.Column(db.Integer, nullable=False, index=True)
    wave = db.Column(db.Integer, nullable=False)
    duration = db.Column(db.Float, nullable=False)
    created = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'score': self.score,
            'wave': self.wave,
            'duration': self.duration,
            'created': self.created.isoformat() if self.created else None,
        }


def top_scores(limit: int = 10) -> List[Score]:
    """Best scores first; ties go to whoever got there earlier."""
    return (
        Score.query
        .order_by(Score.score.desc(), Score.created.asc(), Score.id.asc())
        .limit(limit)
        .all()
    )


def insert_score(name: str, score: int, wave: int, duration: float) -> Score:
    row = Score(name=name, score=score, wave=wave, duration=duration)
    db.session.add(row)
    db.session.commit()
    return row
