"""
Service Configuration Loader

Loads config/service.yml (host, port, logging level, body limit, CORS).
The config directory can be relocated with GPXGEN_CONFIG_DIR; PORT,
LOG_LEVEL and CORS_ALLOW_CREDENTIALS environment variables override the file.
"""

from typing import Dict, Any, Optional
from pathlib import Path
import yaml
import logging

from gpxgen.utils.env import env_bool, env_str, env_int
from gpxgen.utils.constants import DEFAULT_PORT, DEFAULT_MAX_BODY_BYTES

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parents[2] / "config"
SERVICE_CONFIG_FILE = "service.yml"


def get_config_dir() -> Path:
    """Resolve the configuration directory (GPXGEN_CONFIG_DIR or repo config/)."""
    override = env_str("GPXGEN_CONFIG_DIR")
    return Path(override) if override else DEFAULT_CONFIG_DIR


def load_service_config(config_dir: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load service.yml and apply environment overrides.

    Args:
        config_dir: Directory holding service.yml (defaults to get_config_dir())

    Returns:
        dict: Parsed configuration with sections:
            - service: host, port, log_level
            - http: max_body_bytes, cors (allow_origins, allow_methods, ...)

    Raises:
        FileNotFoundError: If service.yml not found
        yaml.YAMLError: If YAML parsing fails
    """
    path = (config_dir or get_config_dir()) / SERVICE_CONFIG_FILE

    if not path.exists():
        logger.error(f"{SERVICE_CONFIG_FILE} not found at {path.absolute()}")
        raise FileNotFoundError(
            f"{SERVICE_CONFIG_FILE} not found at {path}. "
            f"Ensure the config/ directory exists or set GPXGEN_CONFIG_DIR."
        )

    with path.open("r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    service = config.setdefault("service", {})
    http = config.setdefault("http", {})
    http.setdefault("max_body_bytes", DEFAULT_MAX_BODY_BYTES)
    cors = http.setdefault("cors", {}) or {}
    http["cors"] = cors
    cors["allow_credentials"] = env_bool("CORS_ALLOW_CREDENTIALS", bool(cors.get("allow_credentials", False)))

    service["port"] = env_int("PORT", service.get("port", DEFAULT_PORT))
    service["log_level"] = env_str("LOG_LEVEL", service.get("log_level", "INFO")).upper()
    service.setdefault("host", "0.0.0.0")

    logger.debug(f"Loaded service config from {path} (version {config.get('version', 'unknown')})")
    return config
