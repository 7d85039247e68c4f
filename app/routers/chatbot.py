from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException
import logging

from app.errors import StorageWriteError
from app.models import (
    Notification,
    PendingResumeResponse,
    ResumeData,
    ResumeReview,
    SaveResumeRequest,
    WidgetEventResponse,
)
from app.dependencies import get_chatbot_service, get_resume_storage
from app.services.chatbot_service import ChatbotService
from app.services.resume_storage import ResumeStorage
from app.services.resume_validator import validate_resume_data

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chatbot")


@router.post("/events", response_model=WidgetEventResponse)
async def receive_widget_event(
    event: Any = Body(...),
    service: ChatbotService = Depends(get_chatbot_service),
):
    """
    Receives a message event forwarded from the Botpress webchat.
    """
    notification = service.handle_widget_message(event)
    return WidgetEventResponse(handled=notification is not None, notification=notification)


@router.get("/status")
async def get_status(storage: ResumeStorage = Depends(get_resume_storage)) -> Dict[str, bool]:
    return {"ready": storage.is_ready()}


@router.get("/resume-data", response_model=PendingResumeResponse)
async def get_pending_resume(storage: ResumeStorage = Depends(get_resume_storage)):
    """
    Returns the collected resume awaiting review, with its validation result.
    """
    resume_data = storage.load()
    if resume_data is None:
        raise HTTPException(status_code=404, detail="No resume data found")

    return PendingResumeResponse(
        ready=storage.is_ready(),
        resume_data=resume_data,
        validation=validate_resume_data(resume_data),
    )


@router.put("/resume-data", response_model=ResumeData)
async def review_pending_resume(
    reviewed: ResumeReview,
    service: ChatbotService = Depends(get_chatbot_service),
):
    """
    Replaces the pending resume with the user's reviewed version.
    """
    try:
        return service.review(reviewed)
    except StorageWriteError as e:
        logger.exception("Error storing reviewed resume data")
        raise HTTPException(status_code=507, detail=str(e))


@router.delete("/resume-data")
async def discard_pending_resume(storage: ResumeStorage = Depends(get_resume_storage)):
    storage.clear()
    return {"success": True, "message": "Pending resume data cleared"}


@router.post("/save-resume", response_model=Notification)
async def save_resume(
    request_data: SaveResumeRequest,
    service: ChatbotService = Depends(get_chatbot_service),
):
    """
    Validates the pending resume and submits it to the user's saved resumes.
    """
    return await service.save_resume(request_data.user_id)
