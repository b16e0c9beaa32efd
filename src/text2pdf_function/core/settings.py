"""
Settings loader for the text-to-PDF function.

- Loads config from the Fn configuration surface (``ctx.Config()``) or, for
  local runs, from the environment / .env.
- Validates required keys.
- Exposes a frozen, typed dataclass for easy/explicit usage.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple

from dotenv import load_dotenv

from .exceptions import ConfigError

DEFAULT_KEY_FOLDER = "/function"

REQUIRED_KEYS = (
    "TENANT_OCID",
    "USER_OCID",
    "REGION",
    "FINGERPRINT",
    "PRIVATE_KEY_NAME",
    "OUTPUT_BUCKET",
)


@dataclass(frozen=True)
class Settings:
    tenancy: str
    user: str
    region: str
    fingerprint: str
    private_key_name: str
    output_bucket: str
    passphrase: Optional[str] = None
    key_folder: str = DEFAULT_KEY_FOLDER
    tmp_dir: Optional[str] = None
    supported_extensions: Tuple[str, ...] = ("txt",)

    @property
    def private_key_path(self) -> str:
        return os.path.join(self.key_folder, self.private_key_name)

    @staticmethod
    def from_config(config: Mapping[str, str]) -> "Settings":
        """Construct settings from a flat config mapping. Raises ConfigError on missing keys."""
        missing = [k for k in REQUIRED_KEYS if not config.get(k)]
        if missing:
            raise ConfigError("Missing function configuration", ", ".join(missing))

        return Settings(
            tenancy=config["TENANT_OCID"],
            user=config["USER_OCID"],
            region=config["REGION"],
            fingerprint=config["FINGERPRINT"],
            private_key_name=config["PRIVATE_KEY_NAME"],
            output_bucket=config["OUTPUT_BUCKET"],
            passphrase=config.get("PASSPHRASE") or None,
            key_folder=config.get("KEY_FOLDER") or DEFAULT_KEY_FOLDER,
            tmp_dir=config.get("TMP_DIR") or None,
            supported_extensions=parse_extensions(config),
        )

    @staticmethod
    def from_env() -> "Settings":
        """Construct settings from environment variables (and .env for local dev)."""
        return Settings.from_config(local_config())


def parse_extensions(config: Mapping[str, str]) -> Tuple[str, ...]:
    """SUPPORTED_EXTENSIONS as lower-case names without dots; 'txt' when unset."""
    raw = config.get("SUPPORTED_EXTENSIONS") or "txt"
    return tuple(e.strip().lstrip(".").lower() for e in raw.split(",") if e.strip())


def local_config() -> Dict[str, str]:
    """Environment merged with .env, for running outside the Fn runtime."""
    load_dotenv()
    return dict(os.environ)
