"""High-level client facade and construction helpers."""

from __future__ import annotations

from typing import Any, Optional

from .classify.types import ServiceResponse
from .config import ClientConfig
from .core.orchestrator import ProfileOrchestrator
from .core.tracer import Tracer
from .core.types import EvaluationResult
from .errors import ConfigError
from .exporters.base import Exporter
from .gateway.base import EndpointGateway
from .gateway.http import HttpGateway

# Changing these would need a new HTTP connection, not a new snapshot.
TRANSPORT_FIELDS = frozenset({"url", "license", "timeout", "strict_ssl"})


class KeyIDClient:
    """KeyID typing-biometrics client.

    Usable as an async context manager; leaving the block closes the HTTP
    connection pool and the exporter.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        gateway: Optional[EndpointGateway] = None,
        tracer: Optional[Tracer] = None,
        exporter: Optional[Exporter] = None,
    ) -> None:
        if gateway is None:
            if not config.url:
                raise ConfigError("A KeyID service URL is required.")
            gateway = HttpGateway(
                config.url,
                config.license,
                timeout=config.timeout,
                strict_ssl=config.strict_ssl,
            )
        self.gateway = gateway
        self.exporter = exporter
        self.orchestrator = ProfileOrchestrator(
            gateway,
            config=config,
            tracer=tracer or Tracer(),
            exporter=exporter,
        )

    @property
    def config(self) -> ClientConfig:
        return self.orchestrator.config

    def configure(self, **changes: Any) -> ClientConfig:
        """Replace decision settings; workflows already running keep their snapshot."""
        fixed = TRANSPORT_FIELDS.intersection(changes)
        if fixed:
            raise ConfigError(f"Cannot change {', '.join(sorted(fixed))} on a live client; create a new one.")
        return self.orchestrator.configure(**changes)

    async def save(self, entity_id: str, sample: str, session_id: str = "") -> ServiceResponse:
        return await self.orchestrator.save(entity_id, sample, session_id)

    async def remove(self, entity_id: str, sample: str = "", session_id: str = "") -> ServiceResponse:
        return await self.orchestrator.remove(entity_id, sample, session_id)

    async def evaluate(self, entity_id: str, sample: str, session_id: str = "") -> EvaluationResult:
        return await self.orchestrator.evaluate(entity_id, sample, session_id)

    async def passive_login(self, entity_id: str, sample: str, session_id: str = "") -> EvaluationResult:
        return await self.orchestrator.passive_login(entity_id, sample, session_id)

    async def login(self, entity_id: str, sample: str, session_id: str = "") -> EvaluationResult:
        return await self.orchestrator.login(entity_id, sample, session_id)

    async def get_profile_info(self, entity_id: str, session_id: str = "") -> ServiceResponse:
        return await self.orchestrator.get_profile_info(entity_id, session_id)

    async def typing_mistake(self, entity_id: str, **kwargs: str) -> ServiceResponse:
        return await self.orchestrator.typing_mistake(entity_id, **kwargs)

    async def close(self) -> None:
        try:
            await self.gateway.close()
        finally:
            if self.exporter is not None:
                await self.exporter.close()

    async def __aenter__(self) -> "KeyIDClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()


def connect(
    url: Optional[str] = None,
    license: Optional[str] = None,
    *,
    service_name: str = "keyid-client",
    gateway: Optional[EndpointGateway] = None,
    exporter: Optional[Exporter] = None,
    **settings: Any,
) -> KeyIDClient:
    """Create a ready-to-use client; unset values fall back to ``KEYID_*`` env vars."""
    overrides = dict(settings)
    if url is not None:
        overrides["url"] = url
    if license is not None:
        overrides["license"] = license
    config = ClientConfig.from_env(**overrides)
    return KeyIDClient(config, gateway=gateway, tracer=Tracer(service=service_name), exporter=exporter)
