# app/config/settings.py
# Application configuration loaded from the environment

import os
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _split(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings:
    """Configuration for the task tracker API"""

    DATABASE = {
        'url': os.getenv('DATABASE_URL', 'sqlite:///./tasks.db'),
        # Only passed to PostgreSQL connections (Render and similar need "require")
        'ssl_mode': os.getenv('DB_SSL_MODE', ''),
    }

    AUTH = {
        'secret_key': os.getenv('SECRET_KEY', 'change-me'),
        'algorithm': os.getenv('ALGORITHM', 'HS256'),
        'access_token_expire_minutes': int(os.getenv('ACCESS_TOKEN_EXPIRE_MINUTES', 60 * 24)),
    }

    PAGINATION = {
        'page_size': 50,
    }

    CORS = {
        'origins': _split(os.getenv(
            'CORS_ORIGINS',
            'http://localhost:3000,http://127.0.0.1:3000',
        )),
    }

    LOGGING = {
        'level': os.getenv('LOG_LEVEL', 'INFO').upper(),
        'format': '%(asctime)s %(levelname)s [%(name)s] %(message)s',
    }

    @classmethod
    def page_limit(cls, limit: int) -> int:
        """Clamp a requested page size to the configured maximum"""
        return max(0, min(limit, cls.PAGINATION['page_size']))
