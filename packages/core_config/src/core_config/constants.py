import os

# Request body cap for JSON endpoints (1 MiB)
MAX_REQUEST_BODY_BYTES = int(os.getenv("HTTP_MAX_BODY_BYTES", "1048576"))

# Cache-aside defaults
CACHE_DEFAULT_TTL_S = int(os.getenv("CACHE_DEFAULT_TTL_S", "300"))

# HTTP server bootstrap defaults (seconds)
SERVER_PORT = 8080
SERVER_TIMEOUT_KEEP_ALIVE_S = 60
SERVER_SHUTDOWN_TIMEOUT_S = 30

# SQS long-polling
SQS_MAX_MESSAGES = 10
SQS_WAIT_TIME_S = 20

# JWT / OTP
JWT_SECRET_KEY_LENGTH = 32
JWT_ISSUER = "token-service"

ENV_DEVELOPMENT = "development"
ENV_PRODUCTION = "production"
