import logging
import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DEFAULT_MODEL_NAME = "gemini-2.5-flash"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        # GEMINI_API_KEY is preferred; API_KEY is accepted for older deployments
        self.GEMINI_API_KEY = self._get_optional("GEMINI_API_KEY") or self._get_optional("API_KEY")
        self.GEMINI_MODEL = self._get_optional("GEMINI_MODEL", DEFAULT_MODEL_NAME)
        self.LOG_LEVEL = self._get_optional("LOG_LEVEL", "INFO").upper()

    def _get_optional(self, name, default=None):
        value = os.getenv(name)
        if value is None or not value.strip():
            return default
        return value.strip()

    def require_api_key(self):
        if not self.GEMINI_API_KEY:
            raise ValueError(
                "Missing Gemini API key. Set GEMINI_API_KEY in the environment or a .env file."
            )
        return self.GEMINI_API_KEY


def configure_logging(level="INFO"):
    """Configures root logging once; later calls only adjust the level."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    else:
        root.setLevel(level)
