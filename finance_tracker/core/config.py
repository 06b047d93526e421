from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "Personal Finance Tracker"
    VERSION: str = "1.0.0"

    # MongoDB Config
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "finance_tracker"
    MONGO_COLLECTION: str = "transactions"

    # "mongo" or "memory"
    STORAGE_BACKEND: str = "mongo"

    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    class Config:
        env_file = ".env"

settings = Settings()
