import logging
import logging.handlers
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql://portfolio:portfolio@db:5432/portfolio"

    # Session / tokens
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    session_ttl_minutes: int = 60 * 24 * 3  # 3 days, shared by JWT exp and cookie max-age
    session_cookie_name: str = "token"
    cookie_secure: bool = False
    reset_token_ttl_minutes: int = 15
    bcrypt_rounds: int = 12

    # Used to derive the Fernet key for encrypted SMTP credentials
    secret_key: str = "change-me"

    frontend_url: str = "http://localhost:5173"
    cors_origins: str = "http://localhost:5173,http://localhost:5174"
    cors_allow_credentials: bool = True
    trusted_hosts: str = "*"
    rate_limit_auth: str = "10/minute"
    rate_limit_contact: str = "5/minute"
    rate_limit_enabled: bool = True

    # Cloudinary media storage
    cloudinary_cloud_name: str = ""
    cloudinary_api_key: str = ""
    cloudinary_api_secret: str = ""
    max_upload_bytes: int = 5 * 1024 * 1024

    # SMTP (password reset emails)
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    smtp_sender_name: str = "Portfolio"

    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"
    log_max_bytes: int = 10_485_760  # 10 MB
    log_backup_count: int = 5
    log_to_file: bool = True

    model_config = {"env_file": ".env"}

    @property
    def effective_database_url(self) -> str:
        # Heroku-style URLs still use the deprecated scheme
        if self.database_url.startswith("postgres://"):
            return self.database_url.replace("postgres://", "postgresql://", 1)
        return self.database_url

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def trusted_hosts_list(self) -> list[str]:
        return [h.strip() for h in self.trusted_hosts.split(",") if h.strip()] or ["*"]


settings = Settings()


def _quiet_third_party() -> None:
    for name in ("uvicorn.access", "sqlalchemy.engine", "httpcore", "httpx", "multipart"):
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_logging() -> None:
    """Configure application-wide logging.

    - Console: LOG_LEVEL and up, brief format
    - app.log: DEBUG+ with detailed format, rotated at LOG_MAX_BYTES
    - error.log: ERROR+ only, same rotation

    The two files are skipped when LOG_TO_FILE is false (read-only hosts).
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG if settings.log_to_file else level)
    root.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(
        "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    ))
    root.addHandler(console)

    _quiet_third_party()
    if not settings.log_to_file:
        logging.getLogger(__name__).info("Logging configured: level=%s, console only", settings.log_level)
        return

    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    # --- Rotating file handler (detailed, all levels) ---
    detail_fmt = logging.Formatter(
        "%(asctime)s %(levelname)-8s [%(name)s:%(funcName)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    app_handler = logging.handlers.RotatingFileHandler(
        log_dir / "app.log",
        maxBytes=settings.log_max_bytes,
        backupCount=settings.log_backup_count,
        encoding="utf-8",
    )
    app_handler.setLevel(logging.DEBUG)
    app_handler.setFormatter(detail_fmt)
    root.addHandler(app_handler)

    # --- Rotating error-only file handler ---
    err_handler = logging.handlers.RotatingFileHandler(
        log_dir / "error.log",
        maxBytes=settings.log_max_bytes,
        backupCount=settings.log_backup_count,
        encoding="utf-8",
    )
    err_handler.setLevel(logging.ERROR)
    err_handler.setFormatter(detail_fmt)
    root.addHandler(err_handler)

    logging.getLogger(__name__).info(
        "Logging configured: level=%s, dir=%s, max=%s MB x %d backups",
        settings.log_level, log_dir, settings.log_max_bytes // 1_048_576, settings.log_backup_count,
    )
