from dotenv import load_dotenv
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional
import json
import logging
import os

load_dotenv()  # Loads variables from .env file

logger = logging.getLogger(__name__)


DEFAULT_PROXY_URL = "https://api.allorigins.win/get"
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; SEO-Toolbox/1.0)"
DEFAULT_MOBILE_USER_AGENT = (
    "Mozilla/5.0 (Linux; Android 10; K) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Mobile Safari/537.36"
)
DEFAULT_DESKTOP_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

THRESHOLD_ENV_PREFIX = "SEOTOOLS_THRESHOLD_"


class Settings:
    """
    Runtime settings read from the environment (and a .env file).
    """
    PROXY_URL = os.getenv("SEOTOOLS_PROXY_URL", DEFAULT_PROXY_URL)
    TIMEOUT = int(os.getenv("SEOTOOLS_TIMEOUT", "30"))
    USER_AGENT = os.getenv("SEOTOOLS_USER_AGENT", DEFAULT_USER_AGENT)
    MOBILE_USER_AGENT = os.getenv("SEOTOOLS_MOBILE_USER_AGENT", DEFAULT_MOBILE_USER_AGENT)
    DESKTOP_USER_AGENT = os.getenv("SEOTOOLS_DESKTOP_USER_AGENT", DEFAULT_DESKTOP_USER_AGENT)
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()


def _env_threshold_values() -> dict:
    return {
        key[len(THRESHOLD_ENV_PREFIX):].lower(): value
        for key, value in os.environ.items()
        if key.startswith(THRESHOLD_ENV_PREFIX)
    }


@dataclass
class AnalysisThresholds:
    """Length bands and ratios the analyzers judge pages against."""

    # SERP snippet
    title_min: int = 30
    title_max: int = 60
    description_min: int = 120
    description_max: int = 160
    desktop_title_chars: int = 60
    mobile_title_chars: int = 55
    desktop_description_chars: int = 160
    mobile_description_chars: int = 120

    # Mobile/desktop comparison
    min_text_length: int = 300
    text_parity_ratio: float = 0.9  # Mobile text below this share of desktop is a mismatch

    # Pre-rendering
    rendered_content_min: int = 100
    prerendered_content_min: int = 500

    # Mobile-friendly
    mobile_friendly_warning_max_issues: int = 2

    def update(self, values: dict) -> "AnalysisThresholds":
        """Overwrite known fields from ``values``, converting to each field's type.

        Unknown keys and values that do not convert are logged and ignored.
        """
        for f in fields(self):
            if f.name not in values:
                continue
            convert = float if f.type in (float, "float") else int
            try:
                setattr(self, f.name, convert(values[f.name]))
            except (TypeError, ValueError):
                logger.warning(f"Ignoring threshold {f.name}={values[f.name]!r}: not a number")

        unknown = set(values) - {f.name for f in fields(self)}
        if unknown:
            logger.warning(f"Ignoring unknown thresholds: {', '.join(sorted(unknown))}")
        return self

    @classmethod
    def from_env(cls) -> "AnalysisThresholds":
        """Thresholds overridden by SEOTOOLS_THRESHOLD_<FIELD> variables,
        e.g. SEOTOOLS_THRESHOLD_TITLE_MAX=65."""
        return cls().update(_env_threshold_values())

    @classmethod
    def from_file(cls, path: str) -> "AnalysisThresholds":
        """Thresholds from a JSON file, either flat or under a "thresholds" key.

        A missing file gives the defaults.
        """
        file_path = Path(path)
        if not file_path.exists():
            return cls()

        data = json.loads(file_path.read_text(encoding="utf-8"))
        return cls().update(data.get("thresholds", data))

    @classmethod
    def load(cls, path: Optional[str] = None) -> "AnalysisThresholds":
        """Defaults, then the optional JSON file, then environment overrides."""
        thresholds = cls.from_file(path) if path else cls()
        return thresholds.update(_env_threshold_values())

    def to_dict(self) -> dict:
        return asdict(self)

    def save_to_file(self, path: str) -> None:
        Path(path).write_text(json.dumps({"thresholds": self.to_dict()}, indent=2), encoding="utf-8")


# Global default thresholds instance
default_thresholds = AnalysisThresholds()
