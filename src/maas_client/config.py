"""Configuration and logging setup for the MAAS API client."""

import json
import logging
import os
import pathlib
from typing import Literal

import httpx
import pydantic
import structlog

from . import maasapi

CONFIG_ENV_VAR = "MAAS_CLIENT_CONFIG_PATH"
API_KEY_ENV_VAR = "MAAS_API_KEY"
logger = structlog.get_logger(__name__)


class ClientConfig(pydantic.BaseModel):
    """Configuration for a MAAS API client."""

    maas_url: str = pydantic.Field(
        description="Base URL of the MAAS API, e.g. http://maas:5240/MAAS/api/2.0/",
    )
    api_key: str | None = pydantic.Field(
        None,
        description="MAAS API key; requests are anonymous when unset",
        repr=False,
    )
    timeout: float = pydantic.Field(
        maasapi.DEFAULT_TIMEOUT,
        description="Request timeout in seconds",
        gt=0,
    )
    log_level: str = pydantic.Field("INFO", description="Logging level")
    log_format: Literal["logfmt", "json"] = pydantic.Field(
        "logfmt",
        description="Log renderer",
    )


def configure_logging(
    log_level_name: str,
    log_format: str = "logfmt",
    maas_url: str | None = None,
) -> None:
    """Configure structlog for logfmt or JSON output.

    When ``maas_url`` is given it is bound into the context, so every
    record emitted by the client names the MAAS region it talks to.
    """
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.processors.LogfmtRenderer(
            key_order=("timestamp", "level", "msg", "maas_url"),
        )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.EventRenamer("msg"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    if maas_url:
        structlog.contextvars.bind_contextvars(maas_url=maas_url)


def load_config(config_path: str) -> ClientConfig:
    """Load configuration from a JSON file.

    An API key missing from the file is taken from ``MAAS_API_KEY`` so the
    secret can stay out of the configuration file.
    """
    path = pathlib.Path(config_path)
    if not path.exists():
        msg = f"Configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    with path.open("r") as f:
        data = json.load(f)

    if not data.get("api_key") and (env_key := os.environ.get(API_KEY_ENV_VAR)):
        data["api_key"] = env_key

    return ClientConfig(**data)


def create_client(
    config: ClientConfig,
    transport: httpx.BaseTransport | None = None,
) -> maasapi.Client:
    """Construct an anonymous or authenticated client from validated config.

    Args:
        config: Validated client configuration.
        transport: Optional httpx transport handed to the client.

    Returns:
        Authenticated client when config carries an API key, anonymous
        client otherwise.
    """
    if config.api_key:
        client = maasapi.new_authenticated_client(
            config.maas_url,
            config.api_key,
            timeout=config.timeout,
            transport=transport,
        )
    else:
        client = maasapi.new_anonymous_client(
            config.maas_url,
            timeout=config.timeout,
            transport=transport,
        )
    logger.info(
        "Created MAAS client",
        base_url=config.maas_url,
        authenticated=bool(config.api_key),
    )
    return client


def create_client_from_env(config_path: str | None = None) -> maasapi.Client:
    """Create a client using a config path or the environment default."""
    resolved_path = config_path or os.environ.get(CONFIG_ENV_VAR, "maas-client.json")
    config = load_config(resolved_path)
    configure_logging(config.log_level, config.log_format, config.maas_url)
    return create_client(config)
