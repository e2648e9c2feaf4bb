"""Settings loader with environment variable and Docker secrets integration."""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dmc.core.api.exceptions import DmcConfigError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """
    Load secret from /run/secrets (Docker secrets pattern).

    Priority:
    1. /run/secrets/{secret_name} (Docker secrets mount)
    2. Environment variable (fallback)

    Args:
        secret_name: Name of the secret file in /run/secrets
        env_var: Optional environment variable name to check as fallback

    Returns:
        Secret value or None if not found
    """
    secret_file = Path("/run/secrets") / secret_name

    if secret_file.exists() and secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
            if secret_value:
                logger.info("[settings] Loaded %s from /run/secrets", secret_name)
                return secret_value
        except OSError as e:
            logger.warning("[settings] Failed to read /run/secrets/%s: %s", secret_name, e)

    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            logger.info("[settings] Loaded %s from environment (fallback)", env_var)
            return secret_value

    return None


def _env_flag(var_name: str, default: bool = False) -> bool:
    return os.environ.get(var_name, str(default)).strip().lower() == "true"


@dataclass(frozen=True)
class DmcConfig:
    """Connection settings for one DMC instance.

    Transport options (faults never raised, call history recorded) are not
    part of the configuration: they are fixed by the client.
    """
    soap_url: str
    login: str
    password: str = ""
    fault_trace: bool = False
    benchmark: bool = False
    timeout: float = DEFAULT_TIMEOUT


def load_settings(soap_url: str | None = None, login: str | None = None) -> DmcConfig:
    """Load DMC connection settings from environment and /run/secrets.

    Args:
        soap_url: Endpoint taking precedence over DMC_SOAP_URL
        login: Login taking precedence over DMC_LOGIN

    Raises:
        DmcConfigError: If the endpoint or login is missing, or the timeout
            is not a number
    """
    soap_url = (soap_url or os.environ.get("DMC_SOAP_URL", "")).strip()
    if not soap_url:
        raise DmcConfigError("Environment variable DMC_SOAP_URL is required.")

    login = (login or os.environ.get("DMC_LOGIN", "")).strip()
    if not login:
        raise DmcConfigError("Environment variable DMC_LOGIN is required.")

    password = _load_secret_from_file("dmc_password", "DMC_PASSWORD") or ""
    if not password:
        logger.warning("[settings] No DMC password configured; calls will likely be rejected")

    raw_timeout = os.environ.get("DMC_TIMEOUT", str(DEFAULT_TIMEOUT))
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise DmcConfigError(f"DMC_TIMEOUT must be a number of seconds, got {raw_timeout!r}") from None

    fault_trace = _env_flag("DMC_FAULT_TRACE")
    benchmark = _env_flag("DMC_BENCHMARK")

    logger.info("[settings] endpoint=%s; login=%s; fault_trace=%s", soap_url, login, fault_trace)

    return DmcConfig(
        soap_url=soap_url,
        login=login,
        password=password,
        fault_trace=fault_trace,
        benchmark=benchmark,
        timeout=timeout,
    )
