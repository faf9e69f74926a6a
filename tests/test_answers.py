import pytest

from qaboard.errors import NotFoundError
from qaboard.services import answers as answers_service
from qaboard.services import questions as questions_service


@pytest.fixture
def question(db):
    return questions_service.create_question(db, "Q", "Body", [], "dave")


def test_create_requires_existing_question(db):
    with pytest.raises(NotFoundError):
        answers_service.create_answer(db, "hi", 404, "carol")


def test_find_by_question_newest_first(db, question):
    a1 = answers_service.create_answer(db, "one", question.id, "carol")
    a2 = answers_service.create_answer(db, "two", question.id, "carol")
    assert [a.id for a in answers_service.find_by_question_id(db, question.id)] == [a2.id, a1.id]
    assert [a.id for a in answers_service.find_all(db)] == [a2.id, a1.id]


def test_update_and_remove(db, question):
    a = answers_service.create_answer(db, "draft", question.id, "carol")
    assert answers_service.update_answer(db, a.id, content="final").content == "final"
    answers_service.remove_answer(db, a.id)
    with pytest.raises(NotFoundError):
        answers_service.find_one(db, a.id)


@pytest.mark.parametrize("op", ["find_one", "update_answer", "remove_answer"])
def test_missing_answer_not_found(db, op):
    with pytest.raises(NotFoundError):
        getattr(answers_service, op)(db, 777)


def test_delete_by_question_id_is_idempotent(db, question):
    answers_service.create_answer(db, "one", question.id, "carol")
    answers_service.delete_by_question_id(db, question.id)
    answers_service.delete_by_question_id(db, question.id)
    db.commit()
    assert answers_service.find_by_question_id(db, question.id) == []
