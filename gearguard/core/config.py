# gearguard/core/config.py
import os
import json
from dotenv import dotenv_values, load_dotenv, find_dotenv

# Proje kökü ve .env yolu
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
DEFAULT_DOTENV = os.path.join(BASE_DIR, ".env")


def _norm_key(k: str) -> str:
    return k.replace("\ufeff", "").strip() if isinstance(k, str) else k


def load_env() -> str | None:
    """.env dosyasını bul ve ortama yükle (CI'daki env'i ezmeden)."""
    dotenv_path = DEFAULT_DOTENV if os.path.exists(DEFAULT_DOTENV) else find_dotenv(filename=".env", usecwd=True)
    if dotenv_path:
        cfg = dotenv_values(dotenv_path, encoding="utf-8-sig")
        for k, v in cfg.items():
            nk = _norm_key(k)
            if v is not None and (nk not in os.environ or not os.environ[nk].strip()):
                os.environ[nk] = v
        load_dotenv(dotenv_path, override=False)
    return dotenv_path or None


DOTENV_PATH = load_env()


def env_bool(name: str, default: bool) -> bool:
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return val.strip().lower() in ("1", "true", "yes", "on")


def parse_origins(env_val: str | None) -> list[str]:
    if not env_val or env_val.strip() == "*":
        return ["*"]
    try:
        parsed = json.loads(env_val)
        if isinstance(parsed, list):
            return [str(x) for x in parsed]
    except ValueError:
        pass
    return [s.strip() for s in env_val.split(",") if s.strip()]


APP_NAME = os.getenv("APP_NAME", "GearGuard CMMS")
APP_URL = os.getenv("APP_URL", "http://localhost:8000").rstrip("/")

# Oturum / JWT
SECRET_KEY = os.getenv("JWT_SECRET", "dev-secret-change-me")
ALGORITHM = os.getenv("JWT_ALG", "HS256")
SESSION_TTL_MINUTES = int(os.getenv("SESSION_TTL_MINUTES", "720"))
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "gearguard_session")
COOKIE_SECURE = env_bool("COOKIE_SECURE", False)
RESET_TOKEN_TTL_MINUTES = int(os.getenv("RESET_TOKEN_TTL_MINUTES", "60"))

# E-posta
SMTP_HOST = os.getenv("SMTP_HOST") or None
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
SMTP_USERNAME = os.getenv("SMTP_USERNAME") or None
SMTP_PASSWORD = os.getenv("SMTP_PASSWORD") or None
SMTP_TLS = env_bool("SMTP_TLS", True)
MAIL_FROM = os.getenv("MAIL_FROM", "noreply@gearguard.local")

# Başlangıç davranışı
AUTO_CREATE_DB = env_bool("AUTO_CREATE_DB", True)
SEED_DEMO = env_bool("SEED_DEMO", False)

CORS_ALLOW_ORIGINS = parse_origins(os.getenv("CORS_ALLOW_ORIGINS", "*"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
