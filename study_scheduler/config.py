"""
Environment-driven settings. Values come from the process environment or a
local .env file.
"""

import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./study_scheduler.db")
# Constraint snapshots are cached per process. Writes through this API
# invalidate them at once; writes from other workers or straight to the
# database are picked up only after the TTL runs out. Set 0 to disable.
CONSTRAINT_CACHE_TTL_SECONDS = int(os.getenv("CONSTRAINT_CACHE_TTL_SECONDS", "60"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))
