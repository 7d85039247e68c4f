from typing import Iterator

from fastapi import Depends, Header, HTTPException
from supabase import create_client, Client

from .config import Settings, settings
from .services.chatbot_service import ChatbotService
from .services.resume_gateway import ResumeGateway
from .services.resume_storage import ResumeStorage, SessionStoreRegistry

_supabase_client: Client = None

session_stores = SessionStoreRegistry(
    quota_bytes=settings.storage_quota_bytes,
    max_sessions=settings.max_sessions,
    ttl_seconds=settings.session_ttl_seconds,
)


def get_settings() -> Settings:
    return settings


def get_supabase_client() -> Client:
    global _supabase_client
    if _supabase_client is None:
        if not settings.supabase_url or not settings.supabase_anon_key:
            raise HTTPException(
                status_code=500,
                detail="Supabase URL or Key not configured in .env file",
            )
        try:
            _supabase_client = create_client(
                settings.supabase_url, settings.supabase_anon_key
            )
        except Exception as e:
            raise HTTPException(
                status_code=500,
                detail=f"Failed to initialize Supabase client: {str(e)}",
            )
    return _supabase_client


def get_resume_storage(x_session_id: str = Header(...)) -> Iterator[ResumeStorage]:
    """Pending resume storage for the session named by ``X-Session-Id``."""
    store = session_stores.acquire(x_session_id)
    try:
        yield ResumeStorage(store)
    finally:
        session_stores.release(x_session_id)


def get_resume_gateway(
    storage: ResumeStorage = Depends(get_resume_storage),
    app_settings: Settings = Depends(get_settings),
) -> ResumeGateway:
    # An unset URL surfaces as a network error on submit, not here
    return ResumeGateway(
        storage,
        base_url=app_settings.supabase_url,
        anon_key=app_settings.supabase_anon_key,
        timeout=app_settings.request_timeout,
    )


def get_chatbot_service(
    storage: ResumeStorage = Depends(get_resume_storage),
    gateway: ResumeGateway = Depends(get_resume_gateway),
) -> ChatbotService:
    return ChatbotService(storage, gateway)
