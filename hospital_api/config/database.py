# hospital_api/config/database.py

from sqlalchemy import create_engine, pool
from sqlalchemy.orm import declarative_base, sessionmaker
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    database_url: str

    api_version: str = "1.0.0"
    api_title: str = "Hospital Appointment Booking System"
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    allowed_origins: str = "http://localhost:3000,http://localhost:5173"
    debug: bool = True
    log_level: str = "info"

    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_password: Optional[str] = None
    redis_db: int = 0
    redis_max_connections: int = 20
    redis_socket_timeout: int = 5
    cache_enabled: bool = True
    cache_ttl_seconds: int = 600

    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_username: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_use_tls: bool = True
    mail_from_name: str = "Hospital Appointments"
    mail_from_address: str = "noreply@hospital.local"

    encryption_key: str
    jwt_secret_key: str = "change-me"
    jwt_algorithm: str = "HS256"
    auth_enabled: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra='ignore'
    )

settings = Settings()


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        # in-memory databases must share one connection across sessions
        if url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = pool.StaticPool
        return options

    return {
        "poolclass": pool.QueuePool,
        "pool_size": 20,
        "max_overflow": 40,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
    }


engine = create_engine(settings.database_url, echo=False, **_engine_options(settings.database_url))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
