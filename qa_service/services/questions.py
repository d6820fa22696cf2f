# qa_service/services/questions.py

from typing import List, Optional

from sqlalchemy import case, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import NotFoundError, UnauthorizedError
from ..logging_config import get_logger
from ..models import Answer, AnswerVote, Category, Question, QuestionVote, User, utcnow
from ..schemas import QuestionCreate, QuestionUpdate

logger = get_logger(__name__)

LIKE_ESCAPE = "/"


def _contains_pattern(text: str) -> str:
    """LIKE pattern matching ``text`` literally anywhere in a value."""
    for char in (LIKE_ESCAPE, "%", "_"):
        text = text.replace(char, LIKE_ESCAPE + char)
    return f"%{text}%"


def net_votes_subquery(vote_model, key_column):
    """Subquery of ``(key, score)`` where score is upvotes minus downvotes."""
    score = func.sum(case((vote_model.direction == "up", 1), else_=-1))
    return (
        select(key_column.label("target_id"), score.label("score"))
        .group_by(key_column)
        .subquery()
    )


async def list_questions(
    session: AsyncSession,
    *,
    category: Optional[int] = None,
    search: Optional[str] = None,
    sort: Optional[str] = None,
) -> List[Question]:
    """
    Return questions filtered by category and a case-insensitive substring
    of title or body. Unknown or missing ``sort`` means newest first.
    """
    stmt = select(Question)

    if category is not None:
        stmt = stmt.where(Question.category_id == category)

    if search:
        pattern = _contains_pattern(search.lower())
        stmt = stmt.where(
            or_(
                func.lower(Question.title).like(pattern, escape=LIKE_ESCAPE),
                func.lower(Question.body).like(pattern, escape=LIKE_ESCAPE),
            )
        )

    if sort == "oldest":
        stmt = stmt.order_by(Question.created_at.asc(), Question.id.asc())
    elif sort == "views":
        stmt = stmt.order_by(Question.views.desc(), Question.id.desc())
    elif sort == "votes":
        scores = net_votes_subquery(QuestionVote, QuestionVote.question_id)
        stmt = stmt.outerjoin(scores, scores.c.target_id == Question.id).order_by(
            func.coalesce(scores.c.score, 0).desc(),
            Question.created_at.desc(),
            Question.id.desc(),
        )
    else:
        stmt = stmt.order_by(Question.created_at.desc(), Question.id.desc())

    result = await session.execute(stmt)
    return list(result.unique().scalars().all())


async def get_question(session: AsyncSession, question_id: int) -> Question:
    question = await session.get(Question, question_id)
    if question is None:
        raise NotFoundError("Question not found")
    return question


async def view_question(session: AsyncSession, question_id: int) -> Question:
    """Fetch a question and count the read as one view."""
    question = await get_question(session, question_id)
    await session.execute(
        update(Question).where(Question.id == question_id).values(views=Question.views + 1)
    )
    await session.commit()
    await session.refresh(question, attribute_names=["views"])
    return question


async def _get_category(session: AsyncSession, category_id: int) -> Category:
    category = await session.get(Category, category_id)
    if category is None:
        raise NotFoundError("Category not found")
    return category


def _ensure_author(question: Question, user: User, action: str) -> None:
    if question.author_id != user.id:
        raise UnauthorizedError(f"Not authorized to {action} this question")


async def create_question(session: AsyncSession, data: QuestionCreate, author: User) -> Question:
    await _get_category(session, data.category)
    question = Question(
        title=data.title,
        body=data.body,
        category_id=data.category,
        author_id=author.id,
        tags=list(data.tags),
        views=0,
        is_solved=False,
    )
    session.add(question)
    await session.commit()
    logger.info("User %s asked question %s", author.id, question.id)
    return await session.get(Question, question.id, populate_existing=True)


async def update_question(session: AsyncSession, question_id: int, data: QuestionUpdate, user: User) -> Question:
    question = await get_question(session, question_id)
    _ensure_author(question, user, "update")

    if data.title is not None:
        question.title = data.title
    if data.body is not None:
        question.body = data.body
    if data.tags is not None:
        question.tags = list(data.tags)
    if data.category is not None and data.category != question.category_id:
        question.category = await _get_category(session, data.category)
    question.updated_at = utcnow()

    await session.commit()
    return await session.get(Question, question.id, populate_existing=True)


async def delete_question(session: AsyncSession, question_id: int, user: User) -> None:
    """Delete a question together with its answers and every vote on them."""
    question = await get_question(session, question_id)
    _ensure_author(question, user, "delete")

    answer_ids = select(Answer.id).where(Answer.question_id == question_id)

    question.accepted_answer_id = None
    await session.flush()
    await session.execute(delete(AnswerVote).where(AnswerVote.answer_id.in_(answer_ids)))
    await session.execute(delete(Answer).where(Answer.question_id == question_id))
    await session.delete(question)
    await session.commit()
    logger.info("User %s deleted question %s", user.id, question_id)
