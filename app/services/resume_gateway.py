import logging
from typing import Any, Dict, Optional

import httpx

from app.errors import NoDataError, RemoteRejection, TransportFailure
from app.models import ResumeData, SaveResult
from app.services.resume_storage import ResumeStorage

logger = logging.getLogger(__name__)

WEBHOOK_PATH = "/functions/v1/botpress-webhook"


def build_submission(user_id: str, title: str, data: ResumeData) -> Dict[str, Any]:
    """Request body for the save endpoint. Certifications are not part of it."""
    resume = data.model_dump(by_alias=True)
    return {
        "userId": user_id,
        "title": title,
        "personalInfo": resume["personalInfo"],
        "workExperience": resume["workExperience"],
        "skills": resume["skills"],
        "education": resume["education"],
        "status": "complete",
    }


class ResumeGateway:
    """
    Sends the pending resume to the Supabase ``botpress-webhook`` function.

    Every outcome comes back as a ``SaveResult``; nothing is raised for
    expected failures. Local state is cleared only after the server confirms
    the save, so a failed attempt can simply be retried.
    """

    def __init__(
        self,
        storage: ResumeStorage,
        base_url: str,
        anon_key: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.storage = storage
        self.base_url = base_url
        self.anon_key = anon_key
        self.timeout = timeout
        self.transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self.base_url.rstrip('/')}{WEBHOOK_PATH}"

    async def submit(self, user_id: str, title: str) -> SaveResult:
        resume_data = self.storage.load()
        if resume_data is None:
            return SaveResult(success=False, error=NoDataError.message)

        payload = build_submission(user_id, title, resume_data)
        headers = {
            "Authorization": f"Bearer {self.anon_key}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.post(self.endpoint, json=payload, headers=headers)
        except Exception as e:
            # Transport errors, bad URLs and unencodable headers alike
            logger.exception(f"Error saving resume to database: {e}")
            return SaveResult(success=False, error=TransportFailure.message)

        result = _json_body(response)
        if result is None:
            if response.is_success:
                logger.error("Save endpoint answered with a body that is not JSON")
                return SaveResult(success=False, error=TransportFailure.message)
            result = {}

        if response.is_success and result.get("success"):
            self.storage.clear()
            resume_id = result.get("resumeId")
            logger.info(f"Resume saved for user {user_id}: {resume_id}")
            return SaveResult(
                success=True,
                resume_id=str(resume_id) if resume_id is not None else None,
            )

        error = result.get("error") or RemoteRejection.message
        logger.warning(
            f"Save endpoint rejected resume (status={response.status_code}): {error}"
        )
        return SaveResult(success=False, error=str(error))


def _json_body(response: httpx.Response) -> Optional[Dict[str, Any]]:
    """Decoded JSON object, {} for other JSON values, None if not JSON at all."""
    try:
        body = response.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else {}
