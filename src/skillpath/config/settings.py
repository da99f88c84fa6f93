# ---------- SETTINGS ----------

import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# OpenAI configuration
# Without an API key the wizard runs in fully deterministic fallback mode
OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY", "")
OPENAI_MODEL = os.environ.get("OPENAI_MODEL", "gpt-4o-mini")

# Remote profile store (DynamoDB)
# "local" forces local-only persistence even when AWS credentials exist
DYNAMODB_TABLE_NAME = os.environ.get("DYNAMODB_TABLE_NAME", "skillpath-profiles")
PROFILE_STORE_MODE = os.environ.get("PROFILE_STORE_MODE", "remote").lower()

# Upload storage (S3)
S3_UPLOADS_BUCKET = os.environ.get("S3_UPLOADS_BUCKET", None)
AWS_REGION = os.environ.get("AWS_REGION", "ap-southeast-1")

# Local scoped key-value store for sessions and offline snapshots
# Lambda only allows writes under /tmp
if os.environ.get("LAMBDA_TASK_ROOT") is not None:
    LOCAL_STORE_DIR = os.environ.get("LOCAL_STORE_DIR", "/tmp/skillpath/store")
else:
    LOCAL_STORE_DIR = os.environ.get("LOCAL_STORE_DIR", "")

# Wizard sessions kept in memory; older ones are rebuilt from the local store
MAX_ACTIVE_SESSIONS = int(os.environ.get("MAX_ACTIVE_SESSIONS", "1000"))

# Public origin used to build shareable links
SHARE_ORIGIN = os.environ.get("SHARE_ORIGIN", "http://localhost:5173").rstrip("/")

# Frontend origin allowed by CORS
FRONTEND_URL = os.environ.get("FRONTEND_URL", "")


def ai_enabled() -> bool:
    """Return True when text-generation credentials are configured."""
    return bool(OPENAI_API_KEY)


def remote_store_enabled() -> bool:
    """Return True when the remote profile store should be attempted."""
    return PROFILE_STORE_MODE != "local" and bool(DYNAMODB_TABLE_NAME)
