import pytest
from sqlalchemy.exc import IntegrityError

from pew import db
from pew.models import Score, insert_score, top_scores


def test_insert_and_read_back(flask_app):
    row = insert_score('ACE', 120, 2, 31.5)
    assert row.id is not None
    data = row.to_dict()
    assert data['name'] == 'ACE'
    assert data['duration'] == 31.5
    assert data['created']


@pytest.mark.parametrize('name,score,wave,duration', [
    ('', 10, 1, 5.0),
    ('TOOLONG', 10, 1, 5.0),
    ('ACE', -1, 1, 5.0),
    ('ACE', 10, 0, 5.0),
    ('ACE', 10, 1, 0.0),
])
def test_storage_constraints(flask_app, name, score, wave, duration):
    with pytest.raises(IntegrityError):
        insert_score(name, score, wave, duration)
    db.session.rollback()
    assert Score.query.count() == 0


def test_top_scores_ordering(flask_app):
    first = insert_score('AAA', 50, 1, 10.0)
    insert_score('BBB', 90, 2, 10.0)
    second = insert_score('CCC', 50, 1, 10.0)
    insert_score('DDD', 10, 1, 10.0)

    rows = top_scores(3)
    assert [r.name for r in rows] == ['BBB', 'AAA', 'CCC']
    assert rows[1].id == first.id
    assert rows[2].id == second.id
