import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


class Settings(BaseModel):
    admin_key: str = ""
    session_secret: str = ""
    session_max_age: int = 60 * 60 * 24
    session_cookie_name: str = "admin_session"
    allowed_origins: List[str] = ["*"]
    firebase_service_account: Optional[str] = None
    environment: str = "development"
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def admin_enabled(self) -> bool:
        return bool(self.admin_key and self.session_secret)


@lru_cache
def get_settings() -> Settings:
    admin_key = os.getenv("ADMIN_KEY", "")
    return Settings(
        admin_key=admin_key,
        # Sin SESSION_SECRET propio se firma con la clave de admin
        session_secret=os.getenv("SESSION_SECRET") or admin_key,
        session_max_age=int(os.getenv("ADMIN_SESSION_MAX_AGE", 60 * 60 * 24)),
        allowed_origins=[o.strip() for o in os.getenv("ALLOWED_ORIGINS", "*").split(",")],
        firebase_service_account=os.getenv("FIREBASE_SERVICE_ACCOUNT"),
        environment=os.getenv("ENVIRONMENT", "development"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
