# qa_service/services/users.py

from typing import List

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth import create_user, ensure_unique_user, get_password_hash, get_user
from ..errors import NotFoundError, ValidationError
from ..logging_config import get_logger
from ..models import Answer, AnswerVote, Item, Question, QuestionVote, User
from ..schemas import UserCreate, UserUpdate

logger = get_logger(__name__)


async def list_users(session: AsyncSession) -> List[User]:
    result = await session.execute(select(User).order_by(User.id.asc()))
    return list(result.scalars().all())


async def get_user_or_404(session: AsyncSession, user_id: int) -> User:
    user = await get_user(session, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


async def add_user(session: AsyncSession, data: UserCreate) -> User:
    user = await create_user(session, data)
    logger.info("Created user %s (id=%s)", user.username, user.id)
    return user


async def update_user(session: AsyncSession, user_id: int, data: UserUpdate) -> User:
    user = await get_user_or_404(session, user_id)
    await ensure_unique_user(
        session,
        data.username if data.username is not None else user.username,
        data.email if data.email is not None else user.email,
        exclude_id=user.id,
    )
    if data.username is not None:
        user.username = data.username
    if data.email is not None:
        user.email = data.email.lower()
    if data.password is not None:
        user.hashed_password = get_password_hash(data.password)
    if data.reputation is not None:
        user.reputation = data.reputation
    await session.commit()
    return user


async def _count(session: AsyncSession, model, column, user_id: int) -> int:
    result = await session.execute(select(func.count()).select_from(model).where(column == user_id))
    return result.scalar_one()


async def delete_user(session: AsyncSession, user_id: int) -> None:
    """
    Delete a user who has not authored questions or answers. Their items
    are detached and their votes retracted.
    """
    user = await get_user_or_404(session, user_id)
    if await _count(session, Question, Question.author_id, user_id) or await _count(
        session, Answer, Answer.author_id, user_id
    ):
        raise ValidationError("User has questions or answers and cannot be deleted")

    await session.execute(
        update(Item).where(Item.user_id == user_id).values(user_id=None).execution_options(synchronize_session="fetch")
    )
    for vote_model in (QuestionVote, AnswerVote):
        await session.execute(
            delete(vote_model).where(vote_model.user_id == user_id).execution_options(synchronize_session="fetch")
        )
    await session.delete(user)
    await session.commit()
    logger.info("Deleted user %s", user_id)
