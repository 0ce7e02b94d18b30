from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    PROJECT_NAME: str = "Blog API"
    DATABASE_URL: str = "sqlite:///./data/blog.db"

    # Auth Config
    JWT_SECRET: str = "default-secret-key"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRY_HOURS: int = 24
    JWT_ISSUER: str = "blog-api"

    # Schema migrations
    MIGRATIONS_DIR: str = "migrations"

    # Event log pipeline
    EVENT_LOG_PATH: str = "logs.txt"
    EVENT_LOG_CAPACITY: int = 100
    EVENT_LOG_THROTTLE_SECONDS: float = 1.0  # pause before each write, 0 disables

    # Server
    LOG_LEVEL: str = "INFO"
    SERVER_HOST: str = "localhost"
    SERVER_PORT: int = 8080
    CORS_ALLOW_ORIGINS: list[str] = ["*"]

    model_config = SettingsConfigDict(env_file=".env")

settings = Settings()
