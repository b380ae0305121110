from .config import *  # noqa: F401,F403

SECRET_KEY = "test-secret"
APPROVAL_TOKEN_SECRET = "test-approval-secret"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False

# No background jobs or outbound calls under test
SYNC_SCHEDULER_ENABLED = False
SMTP_HOST = ""
