import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./taskgate.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
    SESSION_TTL_HOURS = int(data.get("SESSION_TTL_HOURS", 24 * 7))
    SESSION_COOKIE_NAME = data.get("SESSION_COOKIE_NAME", "session")
    SESSION_COOKIE_SECURE = bool(data.get("SESSION_COOKIE_SECURE", False))
    # Credential for the identity provider's privileged admin channel
    SERVICE_ROLE_KEY = data.get("SERVICE_ROLE_KEY", "dev-service-role-key")
    # "open": profile lookup errors let the request through; "closed": redirect to login
    GATE_FAIL_MODE = data.get("GATE_FAIL_MODE", "open")
    ADMIN_PEER_PROTECTION = bool(data.get("ADMIN_PEER_PROTECTION", True))
    MEMBERS_PATH = data.get("MEMBERS_PATH", "/dashboard")
    ADMIN_PATH = data.get("ADMIN_PATH", "/admin")
    LOGIN_PATH = data.get("LOGIN_PATH", "/login")
    SIGNUP_PATH = data.get("SIGNUP_PATH", "/signup")
    # Idle change streams send a keepalive and re-check their session this often
    SSE_KEEPALIVE_SECONDS = float(data.get("SSE_KEEPALIVE_SECONDS", 15))
