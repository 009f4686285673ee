"""
Boutique - Centralized Configuration
=====================================
All environment variables and constants are loaded here.
No other module should call os.getenv() directly.
"""

import os
import sys
from dotenv import load_dotenv

load_dotenv()


# ==========================================
# 🗄️ Database
# ==========================================
DB_USER = os.getenv("DB_USER")
DB_PASSWORD = os.getenv("DB_PASSWORD")
DB_HOST = os.getenv("DB_HOST", "localhost")
DB_PORT = os.getenv("DB_PORT", "5432")
DB_NAME = os.getenv("DB_NAME")

DATABASE_URL = os.getenv("DATABASE_URL", "")

if not DATABASE_URL:
    if not all([DB_USER, DB_PASSWORD, DB_HOST, DB_NAME]):
        print("[ERROR] Critical: Database config missing in .env (DATABASE_URL or DB_USER, DB_PASSWORD, DB_HOST, DB_NAME)")
        sys.exit(1)
    DATABASE_URL = f"postgresql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"


# ==========================================
# 🔐 Security
# ==========================================
# bcrypt work factor (log2 of the number of rounds)
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS") or "12")

if not 4 <= BCRYPT_ROUNDS <= 31:
    print("[ERROR] Critical: BCRYPT_ROUNDS must be between 4 and 31")
    sys.exit(1)


# ==========================================
# 🌐 HTTP
# ==========================================
CORS_ORIGINS = [
    o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",") if o.strip()
]

CART_COOKIE = "cart_session"

# In-memory carts: at most this many live sessions, each dropped after this
# much inactivity
CART_MAX_SESSIONS = int(os.getenv("CART_MAX_SESSIONS") or "10000")
CART_SESSION_TTL_MINUTES = int(os.getenv("CART_SESSION_TTL_MINUTES") or "120")

if CART_MAX_SESSIONS < 1 or CART_SESSION_TTL_MINUTES < 1:
    print("[ERROR] Critical: CART_MAX_SESSIONS and CART_SESSION_TTL_MINUTES must be positive")
    sys.exit(1)


# ==========================================
# 🔧 App
# ==========================================
DEBUG = os.getenv("DEBUG", "false").lower() == "true"
