# tests/test_seeder.py

from sqlalchemy import func, select

from qa_service import seeder
from qa_service.models import Answer, Category, Question, User


async def _count(session, model):
    return (await session.execute(select(func.count()).select_from(model))).scalar_one()


async def test_import_data_respects_acceptance_invariant(session):
    await seeder.import_data(session)

    assert await _count(session, Category) == len(seeder.CATEGORIES)
    assert await _count(session, User) == len(seeder.USERS)
    assert await _count(session, Question) == len(seeder.QUESTIONS)

    questions = (await session.execute(select(Question))).scalars().all()
    for question in questions:
        accepted = (
            await session.execute(
                select(Answer.id).where(Answer.question_id == question.id, Answer.is_accepted.is_(True))
            )
        ).scalars().all()
        assert question.is_solved == bool(accepted)
        assert question.accepted_answer_id == (accepted[0] if accepted else None)
        assert len(accepted) <= 1


async def test_destroy_data_empties_tables(session):
    await seeder.import_data(session)
    await seeder.destroy_data(session)

    for model in (Answer, Question, Category, User):
        assert await _count(session, model) == 0
