import os
from dotenv import load_dotenv

# Load .env from project root
load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("true", "1", "yes")


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]

DEFAULT_TITLE = os.getenv("DEFAULT_TITLE", "Integration Map Diagram")
SHOW_EXPORT_LABELS = _env_flag("SHOW_EXPORT_LABELS")

# Treat connections pointing at unknown systems as errors instead of warnings
STRICT_REFERENCES = _env_flag("STRICT_REFERENCES")
