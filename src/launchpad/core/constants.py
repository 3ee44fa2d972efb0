"""
Application constants to avoid hardcoded values.

Everything tunable at runtime is read through the ENV_* names below.
"""

# API Configuration
API_TITLE = "Serverless Launchpad Hypermedia API"
API_VERSION = "0.1.0"
API_DESCRIPTION = """
A HAL / HAL-FORMS API for user accounts, sessions and API keys.

## Features

* **Hypermedia**: every response carries `_links` and `_templates`
* **Sessions**: list and revoke sign-in sessions
* **API Keys**: create, list and revoke programmatic credentials
* **Sitemap**: role-aware navigation built from the route table

Clients never build URLs themselves. They follow links and execute
templates returned by the server.
"""

# Server Configuration
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000
DEFAULT_LOG_LEVEL = "info"

# Media Types
HAL_JSON = "application/hal+json"
APPLICATION_JSON = "application/json"

# Paging Configuration
DEFAULT_PAGE_LIMIT = 25
MAX_PAGE_LIMIT = 100

# Cache Configuration (seconds)
SESSION_CACHE_TTL_SECONDS = 300
API_KEY_CACHE_TTL_SECONDS = 600
USER_CACHE_TTL_SECONDS = 600

# Session Configuration
DEFAULT_SESSION_TTL_HOURS = 24
SESSION_COOKIE_NAME = "slp_session"

# API Key Configuration
API_KEY_BYTES = 32
API_KEY_LENGTH = 43
API_KEY_PREFIX_LENGTH = 8
BASE62_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"

# Authorization Header Schemes
AUTH_SCHEME_SESSION = "SessionToken"
AUTH_SCHEME_API_KEY = "ApiKey"

# Header Names
HEADER_TRACE_ID = "X-Trace-Id"
HEADER_AMZN_TRACE_ID = "X-Amzn-Trace-Id"
HEADER_FORWARDED_FOR = "X-Forwarded-For"
HEADER_USER_AGENT = "User-Agent"
HEADER_ETAG = "ETag"
HEADER_IF_NONE_MATCH = "If-None-Match"
HEADER_CACHE_CONTROL = "Cache-Control"

# Template Keys
TEMPLATE_SELF = "self"
TEMPLATE_DEFAULT = "default"
TEMPLATE_BULK_DELETE = "bulk-delete"
TEMPLATE_NEXT = "next"
TEMPLATE_PREV = "prev"
TEMPLATE_DELETE = "delete"
TEMPLATE_COLLECTION = "collection"

# Link Relations
LINK_NEXT = "next"
LINK_PREVIOUS = "previous"

# Template Property Names
PAGING_INSTRUCTION_PROPERTY = "pagingInstruction"

# API Messages
API_STATUS_HEALTHY = "healthy"

# Error Messages
ERROR_AUTH_REQUIRED = "Authentication required"
ERROR_AUTH_HEADER_FORMAT = "Authorization header must start with 'SessionToken ' or 'ApiKey '"
ERROR_SESSION_AUTH_REQUIRED = "This action requires session authentication"
ERROR_USER_NOT_FOUND = "User not found"
ERROR_INVALID_CREDENTIALS = "Invalid or expired credentials"
ERROR_NO_SESSION = "No valid session found"
ERROR_VERIFY_SESSION_ONLY = "Only SessionToken authentication is supported for verify"
ERROR_FEDERATION_FAILED = "Bearer failed validation"
ERROR_BEARER_REQUIRED = "Authorization header must start with 'Bearer '"
ERROR_UNEXPECTED = "An unexpected error occurred"

# Success Messages
SUCCESS_API_KEY_CREATED = "API key created successfully"
SUCCESS_SESSION_REVOKED = "Session revoked successfully"

# Application Lifecycle Messages
STARTUP_MESSAGE = "Launchpad API starting up"
SHUTDOWN_MESSAGE = "Launchpad API shutting down"
SERVER_START_MESSAGE = "Starting Launchpad API"

# CORS Configuration (Development - restrict in production)
CORS_ALLOW_ORIGINS = ["*"]
CORS_ALLOW_CREDENTIALS = True
CORS_ALLOW_METHODS = ["*"]
CORS_ALLOW_HEADERS = ["*"]
CORS_EXPOSE_HEADERS = ["ETag", "X-Trace-Id"]

# Environment Variable Names
ENV_HOST = "HOST"
ENV_PORT = "PORT"
ENV_LOG_LEVEL = "LOG_LEVEL"
ENV_SESSION_TTL_HOURS = "SESSION_TTL_HOURS"
ENV_SESSION_CACHE_TTL = "SESSION_CACHE_TTL"
ENV_API_KEY_CACHE_TTL = "API_KEY_CACHE_TTL"
ENV_USER_CACHE_TTL = "USER_CACHE_TTL"
ENV_FEDERATION_TOKENS = "FEDERATION_TOKENS"
ENV_ENVIRONMENT = "ENVIRONMENT"

# Environment Defaults
DEFAULT_ENVIRONMENT = "development"

# Contact Information
CONTACT_NAME = "Serverless Launchpad"
CONTACT_URL = "https://github.com/houseofwolves/serverlesslaunchpad"

# HTTP Endpoints
ENDPOINT_HEALTH = "/health"

# Logging Configuration
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Performance Thresholds
PERFORMANCE_WARNING_THRESHOLD_MS = 1000
