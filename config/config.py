import os


def env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def env_list(name: str, default: str) -> list:
    return [item.strip() for item in os.environ.get(name, default).split(",") if item.strip()]


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-secret-key"

    # DB
    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "hr_portal")

    # Approval links
    APPROVAL_TOKEN_SECRET = os.environ.get("APPROVAL_TOKEN_SECRET") or SECRET_KEY
    APPROVAL_TOKEN_TTL_HOURS = int(os.environ.get("APPROVAL_TOKEN_TTL_HOURS", "72"))
    APP_BASE_URL = os.environ.get("APP_BASE_URL", "http://localhost:3000")

    # Attendance device API
    ATTENDANCE_API_BASE_URL = os.environ.get("ATTENDANCE_API_BASE_URL", "https://att.vis.com.pk")
    ATTENDANCE_API_DEVICE_ID = os.environ.get("ATTENDANCE_API_DEVICE_ID", "1")
    ATTENDANCE_API_TIMEOUT = float(os.environ.get("ATTENDANCE_API_TIMEOUT", "10"))
    ATTENDANCE_API_VERIFY_SSL = env_bool("ATTENDANCE_API_VERIFY_SSL", True)

    # Mail
    SMTP_HOST = os.environ.get("SMTP_HOST", "")
    SMTP_PORT = int(os.environ.get("SMTP_PORT", "587"))
    SMTP_USER = os.environ.get("SMTP_USER", "")
    SMTP_PASS = os.environ.get("SMTP_PASS", "")
    SMTP_FROM = os.environ.get("SMTP_FROM") or SMTP_USER
    SMTP_USE_SSL = env_bool("SMTP_USE_SSL", SMTP_PORT == 465)
    HR_EMAIL = os.environ.get("HR_EMAIL", "hr@vis.com.pk")
    EMPLOYEE_EMAIL_DOMAIN = os.environ.get("EMPLOYEE_EMAIL_DOMAIN", "vis.com.pk")

    # Office-hour tiers (external employee ids)
    TEN_HOUR_EMPLOYEES = env_list("TEN_HOUR_EMPLOYEES", "13,14,45,1691479623873,1691479623595")
    NINE_HOUR_EMPLOYEES = env_list("NINE_HOUR_EMPLOYEES", "16,3819")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


# Module-level names consumed by create_app()
SECRET_KEY = Config.SECRET_KEY
DB_CONFIG = {
    "host": Config.DB_HOST,
    "port": Config.DB_PORT,
    "user": Config.DB_USER,
    "password": Config.DB_PASSWORD,
    "database": Config.DB_NAME,
}

APPROVAL_TOKEN_SECRET = Config.APPROVAL_TOKEN_SECRET
APPROVAL_TOKEN_TTL_HOURS = Config.APPROVAL_TOKEN_TTL_HOURS
APP_BASE_URL = Config.APP_BASE_URL

ATTENDANCE_API_BASE_URL = Config.ATTENDANCE_API_BASE_URL
ATTENDANCE_API_DEVICE_ID = Config.ATTENDANCE_API_DEVICE_ID
ATTENDANCE_API_TIMEOUT = Config.ATTENDANCE_API_TIMEOUT
ATTENDANCE_API_VERIFY_SSL = Config.ATTENDANCE_API_VERIFY_SSL

SMTP_HOST = Config.SMTP_HOST
SMTP_PORT = Config.SMTP_PORT
SMTP_USER = Config.SMTP_USER
SMTP_PASS = Config.SMTP_PASS
SMTP_FROM = Config.SMTP_FROM
SMTP_USE_SSL = Config.SMTP_USE_SSL
HR_EMAIL = Config.HR_EMAIL
EMPLOYEE_EMAIL_DOMAIN = Config.EMPLOYEE_EMAIL_DOMAIN

TEN_HOUR_EMPLOYEES = Config.TEN_HOUR_EMPLOYEES
NINE_HOUR_EMPLOYEES = Config.NINE_HOUR_EMPLOYEES

LOG_LEVEL = Config.LOG_LEVEL
