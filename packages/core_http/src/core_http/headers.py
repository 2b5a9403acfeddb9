"""
Canonical HTTP header names used by the request helpers.
"""
from typing import Final

CONTENT_TYPE_JSON: Final[str]   = "application/json"

# --- Client address (set by trusted proxies / load balancers) ------------------
X_FORWARDED_FOR: Final[str]     = "X-Forwarded-For"
X_REAL_IP: Final[str]           = "X-Real-IP"

# --- Correlation ---------------------------------------------------------------
X_REQUEST_ID: Final[str]        = "X-Request-Id"
