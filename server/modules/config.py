import os
from typing import Optional
from dotenv import load_dotenv

# Load environment variables (single place for the app)
load_dotenv()


def convert_to_int(value: Optional[str]) -> Optional[int]:
    return int(value) if value is not None else None


def convert_to_bool(value: Optional[str]) -> Optional[bool]:
    if value is None:
        return None
    return value.strip().lower() in {"true", "1", "yes", "y"}


class ConfigEnv:
    # ----- MongoDB -----
    MONGODB_URL = os.getenv("MONGODB_URL")
    MONGODB_DB_NAME = os.getenv("MONGODB_DB_NAME", "threads")
    MONGODB_SERVER_SELECTION_TIMEOUT_MS = (
        convert_to_int(os.getenv("MONGODB_SERVER_SELECTION_TIMEOUT_MS", "5000")) or 5000
    )
    CREATE_INDEXES_ON_STARTUP = bool(
        convert_to_bool(os.getenv("CREATE_INDEXES_ON_STARTUP", "false"))
    )

    # ----- Cache revalidation -----
    # Profile writes coming from this route trigger revalidate_path().
    PROFILE_EDIT_PATH = os.getenv("PROFILE_EDIT_PATH", "/profile/edit")

    # ----- Logging -----
    LOG_LEVEL = (os.getenv("LOG_LEVEL", "INFO") or "INFO").strip().upper()

    REQUIRED = [
        "MONGODB_URL",
    ]

    @classmethod
    def validate(cls) -> None:
        missing = [key for key in cls.REQUIRED if getattr(cls, key) is None]
        if missing:
            raise RuntimeError(f"Missing required env vars: {', '.join(missing)}")
