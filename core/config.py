from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "Mokshamaa Inquiries API"
    ENV: str = "development"

    # -------------------------------------------------
    # Frontend Domains (CORS)
    # -------------------------------------------------
    FRONTEND_DOMAIN: Optional[str] = Field(None, description="Custom domain of the marketing site")

    FRONTEND_ORIGINS: List[str] = [
        "http://localhost:3000",
        "https://mokshamaa.com",
        "https://www.mokshamaa.com",
    ]

    BACKEND_CORS_ORIGINS: List[str] = []

    # -------------------------------------------------
    # Supabase (Primary DB)
    # -------------------------------------------------
    SUPABASE_URL: Optional[str] = None
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = None
    SUPABASE_TIMEOUT_SECONDS: int = Field(10, description="PostgREST request timeout")

    # -------------------------------------------------
    # Inquiries
    # -------------------------------------------------
    INQUIRIES_TABLE: str = "inquiries"
    DEFAULT_INQUIRY_PRIORITY: str = "medium"
    DEFAULT_PAGE_SIZE: int = 50
    MAX_PAGE_SIZE: int = 200

    # -------------------------------------------------
    # Portal (form wizard + admin dashboard client)
    # -------------------------------------------------
    API_BASE_URL: str = "http://localhost:8000"
    API_TIMEOUT_SECONDS: float = 15.0
    DRAFT_AUTOSAVE_SECONDS: float = 1.0

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True


# Instantiate settings
settings = Settings()

# -------------------------------------------------
# Build CORS list dynamically after loading settings
# -------------------------------------------------
cors_origins = []

if settings.FRONTEND_DOMAIN:
    domain = settings.FRONTEND_DOMAIN
    if not domain.startswith("http"):
        domain = f"https://{domain}"
    cors_origins.append(domain.rstrip("/"))

cors_origins.extend([d.rstrip("/") for d in settings.FRONTEND_ORIGINS])

settings.BACKEND_CORS_ORIGINS = sorted(list(set(cors_origins)))
