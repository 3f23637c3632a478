import logging
import os
from dotenv import load_dotenv

# Load .env from project root
load_dotenv()

SETTINGS_PATH = os.getenv("DG_SETTINGS_PATH", "discourse_settings.yaml")
VAULT_PATH = os.getenv("DG_VAULT_PATH", ".")
IMAGE_LOAD_TIMEOUT = float(os.getenv("DG_IMAGE_TIMEOUT", "10"))
LOG_LEVEL = os.getenv("DG_LOG_LEVEL", "INFO")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("DG_CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
