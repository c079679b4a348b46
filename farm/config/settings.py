# farm/config/settings.py

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    ENV: str = "development"
    DATABASE_URL: str = "sqlite:///./farm.db"
    BARN_CAPACITY: int = 20
    BARN_NAME_PREFIX: str = "Barn"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

settings = Settings()
