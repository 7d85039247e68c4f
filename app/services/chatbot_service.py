import logging
from datetime import date
from typing import Any, Optional

from app.errors import StorageWriteError
from app.models import Notification, ResumeData, ResumeReview
from app.services.resume_gateway import ResumeGateway
from app.services.resume_parser import parse_botpress_data
from app.services.resume_storage import ResumeStorage
from app.services.resume_validator import validate_resume_data

logger = logging.getLogger(__name__)

RESUME_COMPLETE_EVENT = "resume_complete"


def resume_title(today: date) -> str:
    """Title given to resumes saved from the chatbot, e.g. ``Resume - 3/7/2026``."""
    return f"Resume - {today.month}/{today.day}/{today.year}"


class ChatbotService:
    """Connects webchat events and the "Save Resume" action to the core."""

    def __init__(self, storage: ResumeStorage, gateway: ResumeGateway):
        self.storage = storage
        self.gateway = gateway

    def handle_widget_message(self, event: Any) -> Optional[Notification]:
        """
        Handles one webchat ``message`` event. Only ``resume_complete``
        payloads matter; everything else is ignored and returns None.
        """
        payload = event.get("payload") if isinstance(event, dict) else None
        if not isinstance(payload, dict) or payload.get("type") != RESUME_COMPLETE_EVENT:
            return None

        data = payload.get("data")
        if not isinstance(data, dict):
            logger.error(f"Botpress resume event carried no resume data: {data!r}")
            return Notification(message="Error processing resume data", type="error")

        try:
            parsed = parse_botpress_data(data)
            self.storage.save(parsed)
        except StorageWriteError:
            logger.exception("Error processing Botpress data")
            return Notification(message="Error processing resume data", type="error")

        return Notification(
            message="Resume data collected! Click 'Save Resume' to save it.",
            type="success",
        )

    def review(self, reviewed: ResumeReview) -> ResumeData:
        data = reviewed.to_resume_data()
        self.storage.save(data)
        return data

    async def save_resume(self, user_id: Optional[str], today: date = None) -> Notification:
        if not user_id:
            return Notification(message="Please log in to save your resume", type="error")

        resume_data = self.storage.load()
        if resume_data is None:
            return Notification(
                message="Please complete the chatbot conversation first", type="error"
            )

        validation = validate_resume_data(resume_data)
        if not validation.valid:
            return Notification(
                message=f"Incomplete data: {', '.join(validation.errors)}", type="error"
            )

        title = resume_title(today or date.today())
        result = await self.gateway.submit(user_id, title)

        if result.success:
            return Notification(
                message="Resume saved successfully!",
                type="success",
                resume_id=result.resume_id,
            )
        return Notification(message=result.error or "Failed to save resume", type="error")
