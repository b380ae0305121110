import os

from .config import *  # noqa: F401,F403
from .config import env_bool

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
APPROVAL_TOKEN_SECRET = os.getenv("APPROVAL_TOKEN_SECRET") or SECRET_KEY

DEBUG = False

AUTO_INIT_DB = env_bool("AUTO_INIT_DB", False)

SYNC_SCHEDULER_ENABLED = env_bool("SYNC_SCHEDULER_ENABLED", True)
