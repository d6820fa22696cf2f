# qa_service/models.py

import re
from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()

VOTE_DIRECTIONS = ("up", "down")

# Largest id a 64-bit INTEGER column can hold.
MAX_ID = 2 ** 63 - 1


def utcnow():
    return datetime.now(timezone.utc)


def slugify(name):
    return re.sub(r"\s+", "-", name.strip().lower())


class User(Base):
    __tablename__ = 'users'
    # Deleted ids are never handed out again, so old tokens cannot match a new user.
    __table_args__ = {"sqlite_autoincrement": True}
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    reputation = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class Category(Base):
    __tablename__ = 'categories'
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), unique=True, nullable=False)
    description = Column(String(200), nullable=False)
    slug = Column(String(60), unique=True, index=True, nullable=False)
    color = Column(String(20), nullable=False, default="#007bff")
    icon = Column(String(16), nullable=False, default="💬")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)


def make_category(name, description, color=None, icon=None):
    """Build a Category with its slug derived from the name."""
    name = name.strip()
    category = Category(name=name, description=description.strip(), slug=slugify(name))
    if color:
        category.color = color
    if icon:
        category.icon = icon
    return category


class _Votable:
    """Vote-set views over the ``votes`` rows of a Question or Answer."""

    @property
    def upvotes(self):
        return sorted(v.user_id for v in self.votes if v.direction == "up")

    @property
    def downvotes(self):
        return sorted(v.user_id for v in self.votes if v.direction == "down")

    @property
    def vote_count(self):
        return len(self.upvotes) - len(self.downvotes)


class QuestionVote(Base):
    __tablename__ = 'question_votes'
    # One row per (question, voter): a voter is in at most one vote set.
    question_id = Column(Integer, ForeignKey('questions.id'), primary_key=True)
    user_id = Column(Integer, ForeignKey('users.id'), primary_key=True)
    direction = Column(String(4), nullable=False)


class AnswerVote(Base):
    __tablename__ = 'answer_votes'
    answer_id = Column(Integer, ForeignKey('answers.id'), primary_key=True)
    user_id = Column(Integer, ForeignKey('users.id'), primary_key=True)
    direction = Column(String(4), nullable=False)


class Question(_Votable, Base):
    __tablename__ = 'questions'
    __table_args__ = {"sqlite_autoincrement": True}
    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    body = Column(Text, nullable=False)
    category_id = Column(Integer, ForeignKey('categories.id'), nullable=False, index=True)
    author_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    views = Column(Integer, nullable=False, default=0)
    tags = Column(JSON, nullable=False, default=list)
    is_solved = Column(Boolean, nullable=False, default=False)
    accepted_answer_id = Column(
        Integer,
        ForeignKey('answers.id', use_alter=True, name='fk_questions_accepted_answer'),
        nullable=True,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    author = relationship(User, lazy="joined")
    category = relationship(Category, lazy="joined")
    votes = relationship(QuestionVote, lazy="selectin", cascade="all, delete-orphan")


class Answer(_Votable, Base):
    __tablename__ = 'answers'
    __table_args__ = {"sqlite_autoincrement": True}
    id = Column(Integer, primary_key=True, index=True)
    body = Column(Text, nullable=False)
    question_id = Column(Integer, ForeignKey('questions.id'), nullable=False, index=True)
    author_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    is_accepted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    author = relationship(User, lazy="joined")
    votes = relationship(AnswerVote, lazy="selectin", cascade="all, delete-orphan")


class Item(Base):
    __tablename__ = 'items'
    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(100), nullable=True)
    price = Column(Float, nullable=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    user = relationship(User, lazy="joined")
