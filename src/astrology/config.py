"""
Client configuration for the Prokerala API.

Credentials can come from environment variables:

    PROKERALA_CLIENT_IDS       - Comma-separated client ids
    PROKERALA_CLIENT_SECRETS   - Comma-separated client secrets (same order)
    PROKERALA_BASE_URL         - Override API root (default: https://api.prokerala.com)
    PROKERALA_TIMEOUT_SEC      - Request timeout (default: 15)
    PROKERALA_RETRIES          - Transport retries on 5xx (default: 0)

or from a YAML file:

    clients:
      - client_id: abc
        client_secret: xyz
    timeout: 10
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

import yaml

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.prokerala.com"
DEFAULT_TIMEOUT_SEC = 15.0
DEFAULT_RETRIES = 0


@dataclass
class AstrologySettings:
    client_ids: List[str] = field(default_factory=list)
    client_secrets: List[str] = field(default_factory=list, repr=False)
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT_SEC
    retries: int = DEFAULT_RETRIES

    def validate(self) -> "AstrologySettings":
        if not self.client_ids:
            raise ConfigurationError("At least one client id/secret pair is required.")
        if len(self.client_ids) != len(self.client_secrets):
            raise ConfigurationError(
                "The number of client IDs and client secrets must be equal "
                f"(got {len(self.client_ids)} ids, {len(self.client_secrets)} secrets)."
            )
        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be greater than 0, got {self.timeout}.")
        if self.retries < 0:
            raise ConfigurationError(f"retries must be 0 or more, got {self.retries}.")
        return self


def _split(name: str, raw: str) -> List[str]:
    """Split a comma-separated list; blank entries would shift id/secret pairing."""
    if not raw.strip():
        return []
    items = [x.strip() for x in raw.split(",")]
    if not all(items):
        raise ConfigurationError(f"{name} contains an empty entry: '{raw}'.")
    return items


def _number(name: str, raw: Any, kind: type) -> Any:
    try:
        return kind(raw)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{name} must be a number, got '{raw}'.") from e


def load_settings_from_env(environ: Optional[Mapping[str, str]] = None) -> AstrologySettings:
    """Build settings from PROKERALA_* environment variables."""
    env = os.environ if environ is None else environ

    settings = AstrologySettings(
        client_ids=_split("PROKERALA_CLIENT_IDS", env.get("PROKERALA_CLIENT_IDS", "")),
        client_secrets=_split("PROKERALA_CLIENT_SECRETS", env.get("PROKERALA_CLIENT_SECRETS", "")),
        base_url=env.get("PROKERALA_BASE_URL", DEFAULT_BASE_URL).strip() or DEFAULT_BASE_URL,
        timeout=_number(
            "PROKERALA_TIMEOUT_SEC",
            env.get("PROKERALA_TIMEOUT_SEC", str(DEFAULT_TIMEOUT_SEC)).strip(),
            float,
        ),
        retries=_number(
            "PROKERALA_RETRIES", env.get("PROKERALA_RETRIES", str(DEFAULT_RETRIES)).strip(), int
        ),
    )
    logger.debug("Loaded %d credential(s) from environment", len(settings.client_ids))
    return settings.validate()


def load_settings_from_yaml(path: Union[str, Path]) -> AstrologySettings:
    """Build settings from a YAML file with a ``clients`` list."""
    try:
        with open(path, encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigurationError(f"{path} must contain a mapping at the top level.")

    clients = config.get("clients") or []
    if not isinstance(clients, list):
        raise ConfigurationError("'clients' must be a list of client_id/client_secret entries.")

    ids: List[str] = []
    secrets: List[str] = []
    for i, entry in enumerate(clients):
        if not isinstance(entry, dict) or not entry.get("client_id") or not entry.get("client_secret"):
            raise ConfigurationError(
                f"clients[{i}] needs both client_id and client_secret."
            )
        ids.append(str(entry["client_id"]))
        secrets.append(str(entry["client_secret"]))

    settings = AstrologySettings(
        client_ids=ids,
        client_secrets=secrets,
        base_url=str(config.get("base_url") or DEFAULT_BASE_URL),
        timeout=_number("timeout", config.get("timeout", DEFAULT_TIMEOUT_SEC), float),
        retries=_number("retries", config.get("retries", DEFAULT_RETRIES), int),
    )
    logger.debug("Loaded %d credential(s) from %s", len(ids), path)
    return settings.validate()
