# qa_service/routers/answers.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth import get_current_user
from ..database import get_session
from ..models import User
from ..schemas import AnswerResponse, AnswerUpdate, EmptyEnvelope, Envelope, VoteRequest
from ..services import answers as answers_service
from .. import voting
from .params import ResourceId

router = APIRouter(prefix="/answers", tags=["answers"])


@router.get("/{answer_id}", response_model=Envelope[AnswerResponse])
async def get_answer(answer_id: ResourceId, session: AsyncSession = Depends(get_session)):
    answer = await answers_service.get_answer(session, answer_id)
    return {"success": True, "data": answer}


@router.put("/{answer_id}", response_model=Envelope[AnswerResponse])
async def update_answer(
    answer_id: ResourceId,
    payload: AnswerUpdate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    answer = await answers_service.update_answer(session, answer_id, payload, current_user)
    return {"success": True, "data": answer}


@router.delete("/{answer_id}", response_model=EmptyEnvelope)
async def delete_answer(
    answer_id: ResourceId,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    await answers_service.delete_answer(session, answer_id, current_user)
    return EmptyEnvelope()


@router.post("/{answer_id}/vote", response_model=Envelope[AnswerResponse])
async def vote_answer(
    answer_id: ResourceId,
    payload: VoteRequest,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    answer = await voting.vote_on_answer(session, answer_id, current_user, payload.vote)
    return {"success": True, "data": answer}


@router.post("/{answer_id}/accept", response_model=Envelope[AnswerResponse])
async def accept_answer(
    answer_id: ResourceId,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    answer = await voting.accept_answer(session, answer_id, current_user)
    return {"success": True, "data": answer}
