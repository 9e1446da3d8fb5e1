"""Punish engine configuration loaded from environment variables."""
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the repo root if it exists
env_path = Path(__file__).resolve().parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

LOG_LEVEL = os.getenv("LAGSCOPE_LOG_LEVEL", "WARNING").upper()

# Default calculation options (wide open unless overridden)
DEFAULT_STALENESS = os.getenv("LAGSCOPE_DEFAULT_STALENESS", "none")
DEFAULT_MIN_DAMAGE = float(os.getenv("LAGSCOPE_DEFAULT_MIN_DAMAGE", "0"))
DEFAULT_MIN_FRAME_ADVANTAGE = int(os.getenv("LAGSCOPE_DEFAULT_MIN_FRAME_ADVANTAGE", "-999"))
DEFAULT_MAX_FRAME_ADVANTAGE = int(os.getenv("LAGSCOPE_DEFAULT_MAX_FRAME_ADVANTAGE", "999"))

MAX_RESULTS_DISPLAY = int(os.getenv("LAGSCOPE_MAX_RESULTS_DISPLAY", "100"))
BEST_PUNISH_LIMIT = int(os.getenv("LAGSCOPE_BEST_PUNISH_LIMIT", "5"))

# Skip a failing defender instead of failing the whole batch
ISOLATE_FAILURES = os.getenv("LAGSCOPE_ISOLATE_FAILURES", "0").lower() in ("1", "true", "yes")


def configure_logging(level: str = None):
    """Set up root logging for scripts. Library modules never call this on import."""
    logging.basicConfig(
        level=level or LOG_LEVEL,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
