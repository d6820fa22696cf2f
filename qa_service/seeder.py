# qa_service/seeder.py

"""
Load sample data into the configured database.

    python -m qa_service.seeder          # wipe, then import sample data
    python -m qa_service.seeder -d       # wipe only
"""

import argparse
import asyncio

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from .auth import get_password_hash
from .config import get_settings
from .database import create_engine_from_settings, create_sessionmaker, init_db
from .logging_config import configure_logging, get_logger
from .models import Answer, AnswerVote, Category, Item, Question, QuestionVote, User, make_category

logger = get_logger(__name__)

CATEGORIES = [
    ("JavaScript", "Questions about JavaScript, ES6+, and modern JS features", "#f7df1e", "📜"),
    ("Python", "Python programming, Django, Flask, and data science", "#3776ab", "🐍"),
    ("React", "React.js, hooks, state management, and components", "#61dafb", "⚛️"),
    ("Database", "SQL, MongoDB, PostgreSQL, and database design", "#47a248", "🗄️"),
    ("Node.js", "Node.js, Express, and backend development", "#68a063", "🟢"),
]

USERS = [
    ("johndoe", "john@example.com", "password123", 150),
    ("janedoe", "jane@example.com", "password123", 200),
    ("techguru", "guru@example.com", "password123", 500),
]

# (title, body, category index, author index, tags, views, upvoter indexes)
QUESTIONS = [
    (
        "How do I use async/await in JavaScript?",
        "I am new to JavaScript and I want to understand how async/await works. "
        "Can someone explain with examples?",
        0, 0, ["async", "await", "promises"], 45, [1, 2],
    ),
    (
        "What is the difference between let, const, and var?",
        "Can someone explain the differences between let, const, and var in JavaScript? "
        "When should I use each one?",
        0, 1, ["variables", "es6"], 78, [0, 2],
    ),
    (
        "How to handle state in React functional components?",
        "I am learning React hooks. How do I manage state in functional components "
        "using useState and useEffect?",
        2, 0, ["react", "hooks", "state"], 92, [1],
    ),
    (
        "Best practices for MongoDB schema design",
        "What are the best practices for designing schemas in MongoDB? "
        "Should I embed or reference documents?",
        3, 2, ["mongodb", "schema", "nosql"], 120, [0, 1],
    ),
    (
        "How do list comprehensions work in Python?",
        "I keep seeing list comprehensions in Python code. How do they work and "
        "when are they better than a for loop?",
        1, 1, ["python", "lists"], 30, [],
    ),
]

# (question index, author index, body, upvoter indexes, accepted)
ANSWERS = [
    (
        0, 2,
        "async/await is syntax sugar over promises. Mark a function async and await "
        "a promise inside it; errors surface as exceptions you can catch with try/catch.",
        [0, 1], True,
    ),
    (
        0, 1,
        "Remember that await only pauses the current async function, not the whole program.",
        [], False,
    ),
    (
        1, 2,
        "var is function-scoped and hoisted; let and const are block-scoped. "
        "Use const by default and let when you need to reassign.",
        [1], False,
    ),
    (
        4, 0,
        "[expr for x in iterable if cond] builds a new list in one expression. "
        "Prefer a loop when the body has side effects.",
        [1, 2], False,
    ),
]


async def destroy_data(session: AsyncSession) -> None:
    await session.execute(update(Question).values(accepted_answer_id=None))
    for model in (AnswerVote, QuestionVote, Answer, Question, Item, Category, User):
        await session.execute(delete(model))
    await session.commit()
    logger.info("Data destroyed")


async def import_data(session: AsyncSession) -> None:
    await destroy_data(session)

    categories = [make_category(name, desc, color=color, icon=icon) for name, desc, color, icon in CATEGORIES]
    session.add_all(categories)
    users = [
        User(username=username, email=email, hashed_password=get_password_hash(password), reputation=reputation)
        for username, email, password, reputation in USERS
    ]
    session.add_all(users)
    await session.flush()
    logger.info("Imported %d categories and %d users", len(categories), len(users))

    questions = []
    for title, body, cat_idx, author_idx, tags, views, upvoters in QUESTIONS:
        question = Question(
            title=title,
            body=body,
            category_id=categories[cat_idx].id,
            author_id=users[author_idx].id,
            tags=tags,
            views=views,
            is_solved=False,
        )
        question.votes = [QuestionVote(user_id=users[i].id, direction="up") for i in upvoters]
        questions.append(question)
    session.add_all(questions)
    await session.flush()

    for q_idx, author_idx, body, upvoters, accepted in ANSWERS:
        answer = Answer(
            body=body,
            question_id=questions[q_idx].id,
            author_id=users[author_idx].id,
            is_accepted=accepted,
        )
        answer.votes = [AnswerVote(user_id=users[i].id, direction="up") for i in upvoters]
        session.add(answer)
        await session.flush()
        if accepted:
            questions[q_idx].is_solved = True
            questions[q_idx].accepted_answer_id = answer.id

    await session.commit()
    logger.info("Imported %d questions and %d answers", len(questions), len(ANSWERS))


async def run(destroy_only: bool = False) -> None:
    settings = get_settings()
    engine = create_engine_from_settings(settings)
    try:
        await init_db(engine)
        async with create_sessionmaker(engine)() as session:
            if destroy_only:
                await destroy_data(session)
            else:
                await import_data(session)
    finally:
        await engine.dispose()


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Seed the Q&A database with sample data.")
    parser.add_argument("-d", "--destroy", action="store_true", help="only delete existing data")
    args = parser.parse_args(argv)

    configure_logging()
    asyncio.run(run(destroy_only=args.destroy))


if __name__ == "__main__":
    main()
