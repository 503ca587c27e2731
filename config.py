import os
from dataclasses import dataclass
from typing import List, Mapping, Optional

from dotenv import load_dotenv

load_dotenv()

LANGUAGES = ("en", "id")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    # MongoDB
    mongo_uri: Optional[str] = None
    database_name: str = "onlinebookstore"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: str = "*"

    # Responses and logging
    message_language: str = "en"
    log_level: str = "INFO"

    def __post_init__(self):
        self.message_language = self.message_language.lower()
        if self.message_language not in LANGUAGES:
            raise ValueError(f"Invalid MESSAGE_LANGUAGE '{self.message_language}'. Must be one of: {LANGUAGES}")
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Invalid LOG_LEVEL '{self.log_level}'. Must be one of: {LOG_LEVELS}")
        if not 0 < self.port < 65536:
            raise ValueError(f"Invalid PORT {self.port}")

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        port = env.get("PORT", "8000")
        try:
            port_number = int(port)
        except ValueError:
            raise ValueError(f"Invalid PORT '{port}'") from None
        return cls(
            mongo_uri=env.get("MONGO_URI") or None,
            database_name=env.get("DATABASE_NAME", "onlinebookstore"),
            host=env.get("HOST", "0.0.0.0"),
            port=port_number,
            cors_origins=env.get("CORS_ORIGINS", "*"),
            message_language=env.get("MESSAGE_LANGUAGE", "en"),
            log_level=env.get("LOG_LEVEL", "INFO"),
        )
