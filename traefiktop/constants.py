"""traefiktop constants."""

from __future__ import annotations

# Traefik API endpoints (relative to the API base URL)
ROUTERS_PATH = "/api/http/routers"
SERVICES_PATH = "/api/http/services"
SERVICE_PATH = "/api/http/services/{name}"

# Network client
DEFAULT_TIMEOUT_S = 5.0
USER_AGENT_PREFIX = "traefiktop"

# Environment variables
ENV_API_URL = "TRAEFIK_API_URL"
ENV_BASIC_AUTH = "TRAEFIK_BASIC_AUTH"

# Monitor defaults
DEFAULT_REFRESH_S = 30
DEFAULT_PAGE_SIZE = 10
INPUT_TIMEOUT_MS = 250

# Raw status strings reported by Traefik
SERVER_UP = "UP"
STATUS_ENABLED = "enabled"
STATUS_DISABLED = "disabled"
FAILOVER_TYPE = "failover"
PROVIDER_SEPARATOR = "@"
