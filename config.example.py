# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets; use a local, gitignored .env.

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "SHOP_APP_NAME": "App display name (default: shop-backend).",
    "SHOP_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    "SHOP_DATA_DIR": "Local data directory, holds shop.log (default: .local/shop).",
    # HTTP
    "SHOP_HTTP_ENABLED": "Serve the HTTP API (true/false, default: true).",
    "SHOP_SERVER_HOST": "Bind address (default: 0.0.0.0).",
    "SHOP_SERVER_PORT": "Listen port (default: 8080). Plain SERVER_PORT is accepted as a fallback.",
    # Background workers
    "SHOP_WORKER_COUNT": "Worker threads in the background pool (default: 5, minimum 1).",
    "SHOP_SHUTDOWN_TIMEOUT": (
        "Seconds to wait for the HTTP listener to close on shutdown (default: 10). "
        "The worker pool is always waited for."
    ),
}
