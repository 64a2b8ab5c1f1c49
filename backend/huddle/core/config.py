# backend/huddle/core/config.py

import os

from dotenv import load_dotenv

load_dotenv()


class Settings:
    def __init__(self):
        self.PROJECT_NAME = "Huddle"
        self.DATABASE_URL = os.getenv("HUDDLE_DATABASE_URL", "sqlite:///./events.db")

        # Served at "/", uploaded images live under assets/images
        self.PUBLIC_DIR = os.getenv("HUDDLE_PUBLIC_DIR", "public")
        self.IMAGES_DIR = os.path.join(self.PUBLIC_DIR, "assets", "images")
        self.IMAGES_URL = "/assets/images"

        # Placeholder identity for listings until a session layer supplies one
        default_user = os.getenv("HUDDLE_DEFAULT_USER_ID", "1")
        self.DEFAULT_USER_ID = int(default_user) if default_user else None

        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.HOST = os.getenv("HUDDLE_HOST", "0.0.0.0")
        self.PORT = int(os.getenv("HUDDLE_PORT", "3000"))


# single shared settings instance
_settings = Settings()


def get_settings() -> Settings:
    return _settings
