# qa_service/routers/questions.py

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth import get_current_user
from ..database import get_session
from ..models import User
from ..schemas import (
    AnswerCreate,
    AnswerResponse,
    EmptyEnvelope,
    Envelope,
    ListEnvelope,
    QuestionCreate,
    QuestionResponse,
    QuestionUpdate,
    VoteRequest,
)
from ..services import answers as answers_service
from ..services import questions as questions_service
from .. import voting
from .params import CategoryFilter, ResourceId

router = APIRouter(prefix="/questions", tags=["questions"])


@router.get("", response_model=ListEnvelope[QuestionResponse])
async def list_questions(
    category: CategoryFilter = None,
    search: Optional[str] = Query(None, description="Case-insensitive match on title or body."),
    sort: Optional[str] = Query(None, description="newest (default), oldest, views or votes."),
    session: AsyncSession = Depends(get_session),
):
    questions = await questions_service.list_questions(session, category=category, search=search, sort=sort)
    return {"success": True, "count": len(questions), "data": questions}


@router.post("", response_model=Envelope[QuestionResponse], status_code=status.HTTP_201_CREATED)
async def create_question(
    payload: QuestionCreate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    question = await questions_service.create_question(session, payload, current_user)
    return {"success": True, "data": question}


@router.get("/{question_id}", response_model=Envelope[QuestionResponse])
async def get_question(question_id: ResourceId, session: AsyncSession = Depends(get_session)):
    question = await questions_service.view_question(session, question_id)
    return {"success": True, "data": question}


@router.put("/{question_id}", response_model=Envelope[QuestionResponse])
async def update_question(
    question_id: ResourceId,
    payload: QuestionUpdate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    question = await questions_service.update_question(session, question_id, payload, current_user)
    return {"success": True, "data": question}


@router.delete("/{question_id}", response_model=EmptyEnvelope)
async def delete_question(
    question_id: ResourceId,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    await questions_service.delete_question(session, question_id, current_user)
    return EmptyEnvelope()


@router.post("/{question_id}/vote", response_model=Envelope[QuestionResponse])
async def vote_question(
    question_id: ResourceId,
    payload: VoteRequest,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    question = await voting.vote_on_question(session, question_id, current_user, payload.vote)
    return {"success": True, "data": question}


@router.get("/{question_id}/answers", response_model=ListEnvelope[AnswerResponse])
async def list_answers(question_id: ResourceId, session: AsyncSession = Depends(get_session)):
    answers = await answers_service.list_answers(session, question_id)
    return {"success": True, "count": len(answers), "data": answers}


@router.post(
    "/{question_id}/answers",
    response_model=Envelope[AnswerResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_answer(
    question_id: ResourceId,
    payload: AnswerCreate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    answer = await answers_service.create_answer(session, question_id, payload, current_user)
    return {"success": True, "data": answer}
