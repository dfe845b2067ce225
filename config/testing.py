import os
import tempfile

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_pipeline_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False

UPLOAD_FOLDER = os.path.join(tempfile.gettempdir(), "hr_pipeline_uploads")
MAX_CONTENT_LENGTH = 10 * 1024 * 1024

ACCOUNTING_YEAR = None
STAFF_CODE_PREFIX = "STF"
