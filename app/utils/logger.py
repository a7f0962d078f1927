"""
Logging configuration

Applied once in main.py through dictConfig; modules log via logging.getLogger(__name__).
"""
from app.core.config import settings

# httpx logs every request at INFO, which floods the log while the Telegram bot long-polls
QUIET_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine")

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "access": {
            "()": "uvicorn.logging.AccessFormatter",
            "fmt": '%(levelprefix)s %(asctime)s :: %(client_addr)s "%(request_line)s" %(status_code)s',
            "use_colors": settings.DEPLOY_PHASE in ("dev", "local"),
        },
        "app": {
            "format": "%(levelname)-8s %(asctime)s [%(name)s] %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "access": {
            "formatter": "access",
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stdout",
        },
        "app": {
            "formatter": "app",
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stdout",
        },
    },
    "loggers": {
        "uvicorn.access": {"handlers": ["access"], "level": "INFO", "propagate": False},
        "app": {"handlers": ["app"], "level": settings.LOG_LEVEL, "propagate": False},
        **{name: {"handlers": ["app"], "level": "WARNING", "propagate": False} for name in QUIET_LOGGERS},
    },
}
