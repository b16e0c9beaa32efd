"""
Credential loader: reads the API signing key and assembles the OCI SDK config.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from ..core.exceptions import CredentialUnavailable
from ..core.settings import Settings

logger = logging.getLogger(__name__)


def read_private_key(cfg: Settings) -> str:
    """Return the PEM text at KEY_FOLDER/PRIVATE_KEY_NAME. Raises CredentialUnavailable."""
    path = cfg.private_key_path
    try:
        with open(path, "r", encoding="utf-8") as f:
            key = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise CredentialUnavailable("Unable to read private Key", e) from e
    logger.info("Read private key", extra={"stage": "credentials", "path": path, "status": "OK"})
    return key


def build_signing_config(cfg: Settings, private_key: str) -> Dict[str, Any]:
    """OCI SDK config dict for API-key signing; key material is passed inline."""
    config: Dict[str, Any] = {
        "user": cfg.user,
        "fingerprint": cfg.fingerprint,
        "tenancy": cfg.tenancy,
        "region": cfg.region,
        "key_content": private_key,
    }
    if cfg.passphrase:
        config["pass_phrase"] = cfg.passphrase
    return config


def load_signing_config(cfg: Settings) -> Dict[str, Any]:
    return build_signing_config(cfg, read_private_key(cfg))
