from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    PROJECT_NAME: str = "FlexHub"
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"

    API_PREFIX: str = "/api"

    DATABASE_URL: str

    # Storage Configuration
    # Provider: "auto" picks Spaces when credentials are present, "local" or "spaces" force one
    STORAGE_PROVIDER: str = "auto"

    # Local Filesystem Storage
    LOCAL_STORAGE_PATH: str = "./storage"
    LOCAL_STORAGE_BASE_URL: str = "/files"

    # DigitalOcean Spaces (S3-compatible)
    DO_SPACES_ACCESS_KEY: str = ""
    DO_SPACES_SECRET_KEY: str = ""
    DO_SPACES_BUCKET: str = ""
    DO_SPACES_REGION: str = "nyc3"
    DO_SPACES_ENDPOINT: str = ""  # public base URL, e.g. https://bucket.nyc3.digitaloceanspaces.com

    # YouTube Data API
    YOUTUBE_API_KEY: str = ""
    YOUTUBE_TIMEOUT: int = 10
    SOCIAL_STATS_REFRESH_MINUTES: int = 10

    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # Shared secret the identity provider front end sends to /auth/signin
    AUTH_PROVIDER_SECRET: str = ""
    INVITE_EXPIRE_DAYS: int = 7

    CORS_ORIGINS: str = "http://localhost:3005"
    PUBLIC_CORS_ORIGINS: str = "*"

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def cors_origins_list(self) -> List[str]:
        if isinstance(self.CORS_ORIGINS, str):
            return [o.strip() for o in self.CORS_ORIGINS.split(",")]
        return self.CORS_ORIGINS

    @property
    def public_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.PUBLIC_CORS_ORIGINS.split(",") if o.strip()]

    @property
    def has_spaces_config(self) -> bool:
        return bool(
            self.DO_SPACES_ACCESS_KEY
            and self.DO_SPACES_BUCKET
            and self.DO_SPACES_ENDPOINT
        )

    @property
    def uses_local_storage(self) -> bool:
        if self.STORAGE_PROVIDER == "auto":
            return not self.has_spaces_config
        return self.STORAGE_PROVIDER == "local"


settings = Settings()
