import os
from functools import lru_cache
from pathlib import Path

from src.components.redirects import detect_format


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        redirects_file = os.environ.get("URLSHORT_REDIRECTS_FILE")
        self.redirects_file = Path(redirects_file) if redirects_file else None
        self.redirects_format = os.environ.get("URLSHORT_FORMAT") or None
        self.host = os.environ.get("URLSHORT_HOST", "127.0.0.1")
        self.port_value = os.environ.get("URLSHORT_PORT", "8080")

    @property
    def port(self) -> int:
        """Bind port; 0 when the configured value is not a number."""
        try:
            return int(self.port_value)
        except ValueError:
            return 0

    @property
    def resolved_format(self) -> str | None:
        """Explicit format, else inferred from the file extension."""
        if self.redirects_format:
            return self.redirects_format
        if self.redirects_file is None:
            return None
        return detect_format(self.redirects_file)


@lru_cache
def get_settings() -> Settings:
    return Settings()
