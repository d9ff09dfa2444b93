from pydantic_settings import BaseSettings
from typing import List, Any
import json
from pathlib import Path


def parse_cors_origins(v: Any) -> List[str]:
    """Parse CORS origins from string or list"""
    if isinstance(v, list):
        return v
    if isinstance(v, str):
        # Try JSON parsing first
        if v.startswith('['):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        # Fall back to comma-separated
        return [origin.strip() for origin in v.split(',') if origin.strip()]
    return []


class Settings(BaseSettings):
    """Application settings - all configurable via environment variables"""

    # ==========================================
    # Application
    # ==========================================
    APP_NAME: str = "KGHS Alumni Network"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # Server Configuration
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 5000

    # ==========================================
    # Database
    # ==========================================
    DATABASE_URL: str
    DB_ECHO: bool = False

    # ==========================================
    # Authentication
    # ==========================================
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7
    BCRYPT_ROUNDS: int = 10

    # Signup rules
    MIN_GRADUATION_YEAR: int = 1950
    GRADUATION_YEAR_LOOKAHEAD: int = 10

    # ==========================================
    # Frontend / CORS
    # ==========================================
    FRONTEND_URL: str = "https://kghs-frontend.onrender.com"
    CORS_ORIGINS_STR: str = "https://kghs-frontend.onrender.com"

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return parse_cors_origins(self.CORS_ORIGINS_STR)

    # ==========================================
    # Object Storage (S3 compatible)
    # ==========================================
    AWS_ACCESS_KEY_ID: str = ""
    AWS_SECRET_ACCESS_KEY: str = ""
    AWS_REGION: str = "us-east-1"
    S3_BUCKET_NAME: str = ""
    S3_ENDPOINT_URL: str = ""  # Empty means AWS S3
    STORAGE_PUBLIC_URL: str = ""  # Public base URL for uploaded objects (CDN / bucket website)
    STORAGE_FOLDER: str = "kghs"
    STORAGE_TIMEOUT_SECONDS: int = 30

    # ==========================================
    # File Upload
    # ==========================================
    MAX_UPLOAD_SIZE: int = 10485760  # 10MB

    # ==========================================
    # Payment Gateway (Paystack)
    # ==========================================
    PAYSTACK_SECRET_KEY: str = ""
    PAYSTACK_BASE_URL: str = "https://api.paystack.co"
    PAYSTACK_CALLBACK_URL: str = "http://localhost:5174/donations/success"
    PAYSTACK_TIMEOUT_SECONDS: float = 15.0
    PAYSTACK_VERIFY_MAX_RETRIES: int = 3
    DONATION_REFERENCE_PREFIX: str = "kghs-don"
    DEFAULT_DONOR_EMAIL: str = "alumni@kghs.com"

    # ==========================================
    # Email
    # ==========================================
    BREVO_API_KEY: str = ""
    BREVO_API_URL: str = "https://api.brevo.com/v3/smtp/email"
    SMTP_HOST: str = "smtp-relay.brevo.com"
    SMTP_PORT: int = 587
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""
    EMAIL_FROM: str = "noreply@kghs.com"
    EMAIL_FROM_NAME: str = "KGHS Alumni Team"
    EMAIL_TIMEOUT_SECONDS: float = 20.0

    # ==========================================
    # Logging
    # ==========================================
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/app.log"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env that aren't defined in Settings

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if self.LOG_FILE:
            Path(self.LOG_FILE).parent.mkdir(exist_ok=True, parents=True)

    @property
    def storage_configured(self) -> bool:
        return bool(self.S3_BUCKET_NAME)

    @property
    def payments_configured(self) -> bool:
        return bool(self.PAYSTACK_SECRET_KEY)

    def public_url_for(self, object_key: str) -> str:
        """Public URL of an uploaded object"""
        if self.STORAGE_PUBLIC_URL:
            return f"{self.STORAGE_PUBLIC_URL.rstrip('/')}/{object_key}"
        if self.S3_ENDPOINT_URL:
            return f"{self.S3_ENDPOINT_URL.rstrip('/')}/{self.S3_BUCKET_NAME}/{object_key}"
        return f"https://{self.S3_BUCKET_NAME}.s3.{self.AWS_REGION}.amazonaws.com/{object_key}"

    def get_login_url(self) -> str:
        return f"{self.FRONTEND_URL.rstrip('/')}/login"


settings = Settings()
