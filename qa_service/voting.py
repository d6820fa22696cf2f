# qa_service/voting.py

"""
Vote ledger and answer acceptance.

Both Questions and Answers carry a vote ledger: one ``votes`` row per voter
with a direction of ``"up"`` or ``"down"``. Casting a vote retracts any
earlier vote by the same voter and records the new one, so a voter is always
in at most one of the two vote sets. The net ``vote_count`` is computed from
the rows and never stored.

Acceptance moves a Question from open to solved: the Question's author
designates one of its Answers as accepted. Accepting another Answer later
switches the designation; there is no un-accept.

Each operation here commits exactly once, so the caller never observes a
half-applied vote or acceptance.
"""

from typing import Union

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .errors import NotFoundError, UnauthorizedError, ValidationError
from .logging_config import get_logger
from .models import VOTE_DIRECTIONS, Answer, AnswerVote, Question, QuestionVote, User, utcnow

logger = get_logger(__name__)

Votable = Union[Question, Answer]


def _vote_row(target: Votable, voter_id: int, direction: str):
    if isinstance(target, Question):
        return QuestionVote(question_id=target.id, user_id=voter_id, direction=direction)
    return AnswerVote(answer_id=target.id, user_id=voter_id, direction=direction)


def record_vote(target: Votable, voter_id: int, direction: str) -> None:
    """
    Replace ``voter_id``'s vote on ``target`` in memory.

    Any previous vote by the voter is retracted from both sets before the
    new one is inserted. Nothing is flushed.
    """
    if direction not in VOTE_DIRECTIONS:
        raise ValidationError("Vote must be 'up' or 'down'")

    existing = next((v for v in target.votes if v.user_id == voter_id), None)
    if existing is not None:
        # Same primary key, so the retraction and re-insert collapse to one row.
        existing.direction = direction
    else:
        target.votes.append(_vote_row(target, voter_id, direction))
    target.updated_at = utcnow()


async def apply_vote(session: AsyncSession, target: Votable, voter: User, direction: str) -> Votable:
    model, target_id, voter_id = type(target), target.id, voter.id
    record_vote(target, voter_id, direction)
    try:
        await session.commit()
    except IntegrityError:
        # A concurrent request inserted this voter's first vote; overwrite it.
        await session.rollback()
        target = await session.get(model, target_id, populate_existing=True)
        if target is None:
            raise NotFoundError(f"{model.__name__} not found")
        record_vote(target, voter_id, direction)
        await session.commit()
    logger.info(
        "User %s voted %s on %s %s (net %d)",
        voter_id, direction, model.__name__.lower(), target_id, target.vote_count,
    )
    return target


async def vote_on_question(session: AsyncSession, question_id: int, voter: User, direction: str) -> Question:
    question = await session.get(Question, question_id)
    if question is None:
        raise NotFoundError("Question not found")
    return await apply_vote(session, question, voter, direction)


async def vote_on_answer(session: AsyncSession, answer_id: int, voter: User, direction: str) -> Answer:
    answer = await session.get(Answer, answer_id)
    if answer is None:
        raise NotFoundError("Answer not found")
    return await apply_vote(session, answer, voter, direction)


async def accept_answer(session: AsyncSession, answer_id: int, requester: User) -> Answer:
    """
    Mark ``answer_id`` as the accepted answer of its question.

    Only the question's author may accept. Every other answer of the
    question loses its accepted flag in the same transaction.
    """
    answer = await session.get(Answer, answer_id)
    if answer is None:
        raise NotFoundError("Answer not found")

    question = await session.get(Question, answer.question_id)
    if question is None:
        raise NotFoundError("Question not found")

    if question.author_id != requester.id:
        raise UnauthorizedError("Only question author can accept answers")

    previous = question.accepted_answer_id
    now = utcnow()

    await session.execute(
        update(Answer)
        .where(Answer.question_id == question.id, Answer.id != answer.id, Answer.is_accepted.is_(True))
        .values(is_accepted=False, updated_at=now)
        .execution_options(synchronize_session="fetch")
    )
    answer.is_accepted = True
    answer.updated_at = now
    question.is_solved = True
    question.accepted_answer_id = answer.id
    question.updated_at = now
    await session.commit()

    if previous is not None and previous != answer.id:
        logger.info("Question %s: accepted answer switched %s -> %s", question.id, previous, answer.id)
    else:
        logger.info("Question %s: accepted answer %s", question.id, answer.id)
    return answer


__all__ = [
    "record_vote",
    "apply_vote",
    "vote_on_question",
    "vote_on_answer",
    "accept_answer",
]
