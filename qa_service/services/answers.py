# qa_service/services/answers.py

from typing import List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import NotFoundError, UnauthorizedError
from ..logging_config import get_logger
from ..models import Answer, AnswerVote, Question, User, utcnow
from ..schemas import AnswerCreate, AnswerUpdate
from .questions import net_votes_subquery, get_question

logger = get_logger(__name__)


async def list_answers(session: AsyncSession, question_id: int) -> List[Answer]:
    """Answers of a question: accepted first, then by net votes, then oldest first."""
    await get_question(session, question_id)

    scores = net_votes_subquery(AnswerVote, AnswerVote.answer_id)
    stmt = (
        select(Answer)
        .outerjoin(scores, scores.c.target_id == Answer.id)
        .where(Answer.question_id == question_id)
        .order_by(
            Answer.is_accepted.desc(),
            func.coalesce(scores.c.score, 0).desc(),
            Answer.created_at.asc(),
            Answer.id.asc(),
        )
    )
    result = await session.execute(stmt)
    return list(result.unique().scalars().all())


async def get_answer(session: AsyncSession, answer_id: int) -> Answer:
    answer = await session.get(Answer, answer_id)
    if answer is None:
        raise NotFoundError("Answer not found")
    return answer


def _ensure_author(answer: Answer, user: User, action: str) -> None:
    if answer.author_id != user.id:
        raise UnauthorizedError(f"Not authorized to {action} this answer")


async def create_answer(session: AsyncSession, question_id: int, data: AnswerCreate, author: User) -> Answer:
    await get_question(session, question_id)
    answer = Answer(body=data.body, question_id=question_id, author_id=author.id, is_accepted=False)
    session.add(answer)
    await session.commit()
    logger.info("User %s answered question %s (answer %s)", author.id, question_id, answer.id)
    return await session.get(Answer, answer.id, populate_existing=True)


async def update_answer(session: AsyncSession, answer_id: int, data: AnswerUpdate, user: User) -> Answer:
    answer = await get_answer(session, answer_id)
    _ensure_author(answer, user, "update")
    answer.body = data.body
    answer.updated_at = utcnow()
    await session.commit()
    return answer


async def delete_answer(session: AsyncSession, answer_id: int, user: User) -> None:
    """
    Delete an answer and its votes. Deleting the accepted answer reopens
    the question.
    """
    answer = await get_answer(session, answer_id)
    _ensure_author(answer, user, "delete")

    question = await session.get(Question, answer.question_id)
    if question is not None and question.accepted_answer_id == answer.id:
        question.accepted_answer_id = None
        question.is_solved = False
        question.updated_at = utcnow()
        await session.flush()
        logger.info("Question %s reopened: accepted answer %s deleted", question.id, answer.id)

    await session.delete(answer)
    await session.commit()
    logger.info("User %s deleted answer %s", user.id, answer_id)
