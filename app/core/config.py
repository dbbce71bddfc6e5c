from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings
from dotenv import load_dotenv
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent.parent.parent

load_dotenv(Path(ROOT_DIR) / '.env')

class Settings(BaseSettings):
    OMDB_BASE_URL: str = "https://www.omdbapi.com/"
    OMDB_API_KEY: str
    OMDB_TIMEOUT_SECONDS: float = 10.0
    FIREBASE_CREDS_PATH: Optional[str] = None
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    TOKEN_TTL_MINUTES: int = 60
    BCRYPT_ROUNDS: int = 10
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = "app.log"
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    @property
    def FIREBASE_CREDS_PATH_ABSOLUTE(self) -> Optional[Path]:
        """Returns absolute path to Firebase credentials file"""
        if not self.FIREBASE_CREDS_PATH:
            return None
        return ROOT_DIR / self.FIREBASE_CREDS_PATH

    class Config:
        env_file = ".env"
        extra = "ignore"

@lru_cache()
def get_settings() -> Settings:
    return Settings()
