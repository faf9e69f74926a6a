import pytest

from qaboard.errors import NotFoundError
from qaboard.models import Answer
from qaboard.services import answers as answers_service
from qaboard.services import questions as questions_service
from qaboard.services import tags as tags_service


def usage(db, name):
    db.expire_all()
    tag = tags_service.find_by_name(db, name)
    return tag.usage_count if tag else None


def test_create_registers_tags_and_counts(db):
    q = questions_service.create_question(db, "Title", "Body", ["Python", "sql"], "dave")
    assert q.tags == ["Python", "sql"]
    assert q.author == "dave"
    assert usage(db, "python") == 1
    assert usage(db, "sql") == 1


def test_duplicate_tags_count_per_occurrence(db):
    q = questions_service.create_question(db, "Dup", "Body", ["a", "a"], "dave")
    assert q.tags == ["a", "a"]
    assert usage(db, "a") == 2


def test_create_without_tags(db):
    q = questions_service.create_question(db, "No tags", "Body", None, "dave")
    assert q.tags == []


def test_usage_count_tracks_live_questions(db):
    ids = [
        questions_service.create_question(db, f"Q{i}", "Body", ["t"], "dave").id
        for i in range(5)
    ]
    for qid in ids[:2]:
        questions_service.remove_question(db, qid)
    assert usage(db, "t") == 3


def test_update_swaps_tags_without_diffing(db):
    q = questions_service.create_question(db, "Q", "Body", ["x", "y"], "dave")
    updated = questions_service.update_question(db, q.id, tags=["y", "z"])
    assert updated.tags == ["y", "z"]
    assert usage(db, "x") == 0
    assert usage(db, "y") == 1
    assert usage(db, "z") == 1


def test_update_with_empty_tags_keeps_existing(db):
    q = questions_service.create_question(db, "Q", "Body", ["x"], "dave")
    updated = questions_service.update_question(db, q.id, title="New title", tags=[])
    assert updated.title == "New title"
    assert updated.tags == ["x"]
    assert usage(db, "x") == 1


def test_update_missing_question(db):
    with pytest.raises(NotFoundError):
        questions_service.update_question(db, 999, title="x")


def test_remove_cascades_answers_and_releases_tags(db, make_user):
    make_user("dave")
    q = questions_service.create_question(db, "Q", "Body", ["x", "y"], "dave")
    other = questions_service.create_question(db, "Other", "Body", ["x"], "dave")
    answers_service.create_answer(db, "first", q.id, "carol")
    answers_service.create_answer(db, "second", q.id, "erin")
    kept = answers_service.create_answer(db, "elsewhere", other.id, "carol")

    questions_service.remove_question(db, q.id)

    assert usage(db, "x") == 1
    assert usage(db, "y") == 0
    assert answers_service.find_by_question_id(db, q.id) == []
    assert [a.id for a in db.query(Answer).all()] == [kept.id]
    with pytest.raises(NotFoundError):
        questions_service.find_one(db, q.id)


def test_remove_missing_question(db):
    with pytest.raises(NotFoundError):
        questions_service.remove_question(db, 12345)


def test_find_all_newest_first(db):
    first = questions_service.create_question(db, "First", "Body", [], "dave")
    second = questions_service.create_question(db, "Second", "Body", [], "dave")
    assert [q.id for q in questions_service.find_all(db)] == [second.id, first.id]
