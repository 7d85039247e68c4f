from typing import List

from pydantic_settings import BaseSettings
from dotenv import load_dotenv
load_dotenv()

class Settings(BaseSettings):
    supabase_url: str = ""
    supabase_anon_key: str = ""
    # Seconds before the save request to the edge function is abandoned
    request_timeout: float = 10.0
    # Same ceiling browsers put on localStorage
    storage_quota_bytes: int = 5 * 1024 * 1024
    # Pending-resume sessions kept in memory, and how long an idle one survives
    max_sessions: int = 10000
    session_ttl_seconds: float = 24 * 60 * 60
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    class Config:
        env_file = ".env"  # .env file is in the project root
        env_file_encoding = "utf-8"


settings = Settings()
