"""
Service Configuration

All settings are read from environment variables once, at import time.
"""

import os

# ============================================
# Server
# ============================================

PORT = int(os.getenv("PORT", "8080"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# ============================================
# Cache backend
# ============================================

# When unset, the in-process memory store is used
REDIS_URL = os.getenv("REDIS_URL", "")
REDIS_SOCKET_TIMEOUT_SECONDS = float(os.getenv("REDIS_SOCKET_TIMEOUT_SECONDS", "5"))

# ============================================
# Outbound HTTP
# ============================================

HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))
USER_AGENT = os.getenv(
    "USER_AGENT",
    "Mozilla/5.0 (compatible; pagecard/0.1; +https://indieweb.org/h-card)",
)
