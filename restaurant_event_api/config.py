"""Settings for the restaurant event API stack.

Values come from CDK context, environment variables and an optional YAML
file, and are validated before any construct is created.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

DEFAULT_PARENT_DOMAIN = "cloud101.nl"

_DNS_LABEL = re.compile(r"^[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?$")


class StackConfig(BaseModel):
    """Configuration for one subdomain deployment."""

    subdomain: str = Field(..., description="Left-most DNS label of the API domain")
    parent_domain: str = Field(DEFAULT_PARENT_DOMAIN, description="Existing public hosted zone")
    lambda_asset_path: str = Field("lambda/event_lambda", description="Event function code directory")
    lambda_handler: str = Field("handler.main", description="Event function entry point")
    account: str | None = Field(None, description="Deployment account")
    region: str | None = Field(None, description="Deployment region")

    @field_validator("subdomain")
    @classmethod
    def validate_subdomain(cls, v: str) -> str:
        if not _DNS_LABEL.match(v):
            raise ValueError(
                f"subdomain {v!r} is not a valid DNS label "
                "(lower-case letters, digits and hyphens, at most 63 characters)"
            )
        return v

    @field_validator("parent_domain")
    @classmethod
    def validate_parent_domain(cls, v: str) -> str:
        v = v.rstrip(".").lower()
        labels = v.split(".")
        if len(labels) < 2 or not all(_DNS_LABEL.match(label) for label in labels):
            raise ValueError(f"parent_domain {v!r} is not a valid domain name")
        return v

    @property
    def api_domain_name(self) -> str:
        return f"{self.subdomain}.{self.parent_domain}"

    @property
    def stack_id(self) -> str:
        return f"{self.subdomain}-restaurant-event-api"


def load_config(path: str | Path | None = None, overrides: dict[str, Any] | None = None) -> StackConfig:
    """Load a StackConfig from an optional YAML file plus explicit overrides.

    Overrides whose value is None are ignored so callers can pass through
    unset context or environment lookups.
    """
    data: dict[str, Any] = {}
    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
        logger.debug("Loaded configuration from %s", config_path)

    for key, value in (overrides or {}).items():
        if value is not None:
            data[key] = value

    return StackConfig(**data)


def config_from_app(app: Any) -> StackConfig:
    """Resolve the configuration for a CDK app.

    CDK context takes precedence over environment variables, which take
    precedence over the YAML file named by the ``configFile`` context key or
    the ``CONFIG_FILE`` environment variable.
    """
    ctx = app.node.try_get_context
    config_file = ctx("configFile") or os.environ.get("CONFIG_FILE")

    overrides = {
        "subdomain": ctx("subdomain") or os.environ.get("SUBDOMAIN"),
        "parent_domain": ctx("parentDomain") or os.environ.get("PARENT_DOMAIN"),
        "account": ctx("account") or os.environ.get("CDK_DEFAULT_ACCOUNT"),
        "region": ctx("region") or os.environ.get("CDK_DEFAULT_REGION"),
    }
    return load_config(config_file, overrides)
