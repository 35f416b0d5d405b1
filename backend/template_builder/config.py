from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "Template Builder"
    ENVIRONMENT: str = "development"

    # Database - Handle Render's postgres:// URL format
    DATABASE_URL: str = "sqlite:///./template_builder.db"

    # Template store backend
    STORE_BACKEND: str = "sql"  # sql | memory

    # CORS - parse from environment variable (comma-separated)
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5000"

    LOG_LEVEL: str = "INFO"

    # Request bodies (page component lists can get large)
    MAX_REQUEST_SIZE: int = 5 * 1024 * 1024  # 5MB

    # Export
    EXPORT_COMPRESSION_LEVEL: int = 9
    DEFAULT_EXPORT_NAME: str = "wordpress-template"

    # Rate limits
    RATE_LIMIT_EXPORT_PER_MINUTE: int = 10
    RATE_LIMIT_GENERATE_PER_MINUTE: int = 60
    RATE_LIMIT_DEFAULT_PER_MINUTE: int = 120
    RATE_LIMIT_STORAGE_URI: str = "memory://"  # e.g. redis://host:6379/0 when running several workers

    @property
    def database_url_fixed(self) -> str:
        """Fix Render's postgres:// to postgresql:// for SQLAlchemy"""
        url = self.DATABASE_URL
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql://", 1)
        return url

    @property
    def cors_origins_list(self) -> list:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
