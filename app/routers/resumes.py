from fastapi import APIRouter, Depends, HTTPException
import logging
from typing import Any, Dict, List, Optional

from supabase import Client

from app.dependencies import get_supabase_client
from app.models import ResumeCard

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resumes")

RESUMES_TABLE = "resumes"


def format_file_size(size: Optional[Any]) -> str:
    """Human readable size for a byte count, "-" when unknown."""
    if size is None or isinstance(size, bool):
        return "-"
    try:
        size = float(size)
    except (TypeError, ValueError):
        return "-"
    if size < 1024:
        return f"{int(size)} B"
    for unit in ("KB", "MB"):
        size /= 1024
        if size < 1024 or unit == "MB":
            return f"{size:.1f} {unit}"


def to_resume_card(row: Dict[str, Any]) -> ResumeCard:
    return ResumeCard(
        id=str(row.get("id")),
        title=row.get("title") or "Untitled resume",
        created_at=row.get("created_at") or "",
        file_size=format_file_size(row.get("file_size")),
        status=row.get("status") or "draft",
    )


@router.get("/{user_id}", response_model=List[ResumeCard])
async def list_resumes(user_id: str, supabase: Client = Depends(get_supabase_client)):
    """
    List the saved resumes of a user as cards, newest first.
    """
    try:
        result = (
            supabase.table(RESUMES_TABLE)
            .select("id, title, created_at, file_size, status")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [to_resume_card(row) for row in result.data or []]

    except HTTPException as e:
        raise e
    except Exception as e:
        logger.exception("Error occurred in list_resumes")
        raise HTTPException(
            status_code=500,
            detail=f"An error occurred while retrieving resumes: {str(e)}",
        )


@router.delete("/{user_id}/{resume_id}")
async def delete_resume(
    user_id: str, resume_id: str, supabase: Client = Depends(get_supabase_client)
):
    """
    Delete one saved resume of a user
    """
    try:
        result = (
            supabase.table(RESUMES_TABLE)
            .delete()
            .eq("id", resume_id)
            .eq("user_id", user_id)
            .execute()
        )

        if not result.data:
            raise HTTPException(status_code=404, detail="Resume not found")

        return {
            "success": True,
            "message": f"Resume {resume_id} deleted successfully",
        }

    except HTTPException as e:
        raise e
    except Exception as e:
        logger.exception("Error occurred in delete_resume")
        raise HTTPException(
            status_code=500,
            detail=f"An error occurred while deleting the resume: {str(e)}",
        )
