# src/spot_reconciler/config/defaults.py
from typing import Any, Dict, Tuple

DEFAULT_CONFIG_FILENAME = "spot_reconciler.json"

DEFAULT_CONFIG: Dict[str, Any] = {
    "version": "1.0.0",

    # AWS provider configuration
    "provider": {
        "regions": ["us-east-1"],
        "endpoint_url": "",
        "profile": "",
        "max_retry_attempts": 3,
        "connect_timeout_ms": 10000,
        "read_timeout_ms": 60000,
        "validate_credentials": False,
    },

    # Reconciliation loop configuration
    "poller": {
        "batch_size": 100,
        "poll_interval_seconds": 25,
        "max_workers": None,
    },

    # State store configuration
    "storage": {
        "strategy": "json",
        "json": {
            "path": "${SPOT_RECONCILER_WORKDIR:.}/spot_requests.json",
        },
    },

    # Logging configuration
    "logging": {
        "level": "INFO",
        "destination": "stdout",
        "file": {
            "path": "${SPOT_RECONCILER_LOGDIR:logs}/spot_reconciler.log",
            "max_size_mb": 10,
            "backup_count": 5,
        },
    },
}

# Environment variables that override a single configuration value
ENV_OVERRIDES: Dict[str, Tuple[str, ...]] = {
    "SPOT_RECONCILER_REGIONS": ("provider", "regions"),
    "AWS_ENDPOINT_URL": ("provider", "endpoint_url"),
    "AWS_PROFILE": ("provider", "profile"),
    "SPOT_RECONCILER_BATCH_SIZE": ("poller", "batch_size"),
    "SPOT_RECONCILER_POLL_INTERVAL": ("poller", "poll_interval_seconds"),
    "SPOT_RECONCILER_STORAGE": ("storage", "strategy"),
    "SPOT_RECONCILER_STATE_FILE": ("storage", "json", "path"),
    "LOG_LEVEL": ("logging", "level"),
    "LOG_DESTINATION": ("logging", "destination"),
}
