import os
from pathlib import Path
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")

# --- API Configuration ---
# Base URL the client joins every request path onto.
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:3000/api")
# Origin the same-origin proxy forwards /api/* to.
BACKEND_API_BASE = os.getenv("BACKEND_API_BASE", "http://localhost:3000/api")
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "15"))

# --- Path Configuration ---
OUTPUT_DIR = BASE_DIR / os.getenv("OUTPUT_DIR", "output")
LOG_DIR = BASE_DIR / os.getenv("LOG_DIR", "logs")

# --- Export ---
SAVE_JSON_OUTPUT = os.getenv("SAVE_JSON_OUTPUT", "false").lower() in ("1", "true", "yes")

# --- Shared Business Logic ---
# Report kinds served under /reports/{kind}, in display order.
REPORT_TYPES = [
    "stock",
    "cogs",
    "valuation",
]


class ApiConfig(BaseModel):
    """
    Process-wide configuration handed to the HTTP client and the proxy.
    Built once at startup so nothing downstream reads the environment.
    """

    model_config = ConfigDict(frozen=True)

    api_base_url: str = API_BASE_URL
    backend_api_base: str = BACKEND_API_BASE
    timeout: float = Field(default=REQUEST_TIMEOUT, gt=0)


def load_config() -> ApiConfig:
    return ApiConfig(
        api_base_url=API_BASE_URL,
        backend_api_base=BACKEND_API_BASE,
        timeout=REQUEST_TIMEOUT,
    )
