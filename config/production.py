import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_pipeline"),
    "pool_size": int(os.getenv("DB_POOL_SIZE", "0")),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "/var/lib/hr-pipeline/uploads")
MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(10 * 1024 * 1024)))

ACCOUNTING_YEAR = int(os.getenv("ACCOUNTING_YEAR")) if os.getenv("ACCOUNTING_YEAR") else None
STAFF_CODE_PREFIX = os.getenv("STAFF_CODE_PREFIX", "STF")
