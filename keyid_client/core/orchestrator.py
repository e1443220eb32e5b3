"""Multi-step KeyID profile workflows.

Each public coroutine is one dependent chain of gateway calls. The
configuration snapshot is captured once at the start of a workflow so a
concurrent :meth:`ProfileOrchestrator.configure` never changes a decision
already in flight.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import replace
from typing import AsyncIterator, Optional

from ..classify.classifier import classify, classify_single, classify_text
from ..classify.types import ErrorKind, ServiceResponse
from ..config import ClientConfig
from ..errors import LicenseError, TransportError
from ..exporters.base import Exporter
from ..gateway.base import EndpointGateway
from ..policy.engine import DecisionPolicy
from ..token.broker import TokenBroker
from ..token.types import TokenScope
from ..utils.time import dotnet_ticks
from .context import WorkflowContext
from .tracer import Tracer
from .types import EvaluationResult

logger = logging.getLogger(__name__)

# Evaluation errors meaning "no usable profile yet"; passive login enrolls on these.
ENROLLABLE_KINDS = frozenset(
    {
        ErrorKind.ENTITY_NOT_FOUND,
        ErrorKind.INSUFFICIENT_DATA,
        ErrorKind.TOO_MUCH_VARIANCE,
    }
)

TRANSPORT_ERROR_KIND = "TRANSPORT"


class ProfileOrchestrator:
    """Save, remove, evaluate and passive-login workflows over a gateway."""

    def __init__(
        self,
        gateway: EndpointGateway,
        *,
        config: Optional[ClientConfig] = None,
        tracer: Optional[Tracer] = None,
        exporter: Optional[Exporter] = None,
        token_broker: Optional[TokenBroker] = None,
    ) -> None:
        self.gateway = gateway
        self.config = config or ClientConfig()
        self.tracer = tracer or Tracer()
        self.exporter = exporter
        self.token_broker = token_broker or TokenBroker(gateway)

    def configure(self, **changes: object) -> ClientConfig:
        """Swap in a new configuration snapshot for workflows started later."""
        self.config = self.config.with_changes(**changes)
        return self.config

    async def save(self, entity_id: str, sample: str, session_id: str = "") -> ServiceResponse:
        """Create or extend a profile, retrying once with a token if asked to."""
        return await self._save(entity_id, sample, session_id)

    async def remove(self, entity_id: str, sample: str = "", session_id: str = "") -> ServiceResponse:
        """Remove a profile once the service grants a removal token."""
        async with self._workflow("remove", entity_id, session_id) as span:
            grant = await self.token_broker.acquire_token(entity_id, TokenScope.REMOVE, sample)
            if grant.token is None:
                # The token step is final: the service already acted or refused.
                response = grant.response
            else:
                span.token_used = True
                response = self._checked(classify(await self.gateway.remove_profile(entity_id, grant.token.value)))
            span.error_kind = response.error_kind.value
            return response

    async def evaluate(self, entity_id: str, sample: str, session_id: str = "") -> EvaluationResult:
        """Score ``sample`` against the profile and apply the decision policy."""
        return await self._evaluate(self.config, entity_id, sample, session_id)

    async def passive_login(self, entity_id: str, sample: str, session_id: str = "") -> EvaluationResult:
        """Evaluate, enrolling the sample when the profile is missing or not ready.

        Profiles that cannot yet be judged always report a match; the
        enrollment attempt is best-effort and its outcome never reaches the
        caller.
        """
        return await self._passive_login(self.config, entity_id, sample, session_id)

    async def login(self, entity_id: str, sample: str, session_id: str = "") -> EvaluationResult:
        """Evaluate, or passively enroll when ``passive_enrollment`` is set."""
        config = self.config
        if config.passive_enrollment:
            return await self._passive_login(config, entity_id, sample, session_id)
        return await self._evaluate(config, entity_id, sample, session_id)

    async def _passive_login(
        self,
        config: ClientConfig,
        entity_id: str,
        sample: str,
        session_id: str,
    ) -> EvaluationResult:
        async with self._workflow("passive_login", entity_id, session_id) as span:
            result = await self._evaluate(config, entity_id, sample, session_id, parent=span)

            if result.error_kind in ENROLLABLE_KINDS:
                await self._enroll_best_effort(entity_id, sample, session_id, parent=span)
                result = replace(result, matched=True, is_ready=False, confidence=100.0, fidelity=100.0)
            elif result.error is None and not result.is_ready:
                await self._enroll_best_effort(entity_id, sample, session_id, parent=span)
                result = replace(result, matched=True)

            span.error_kind = result.error_kind.value
            span.matched = result.matched
            return result

    async def get_profile_info(self, entity_id: str, session_id: str = "") -> ServiceResponse:
        async with self._workflow("get_profile_info", entity_id, session_id) as span:
            response = self._checked(classify_single(await self.gateway.get_profile_info(entity_id)))
            span.error_kind = response.error_kind.value
            return response

    async def typing_mistake(
        self,
        entity_id: str,
        *,
        mistype: str = "",
        session_id: str = "",
        source: str = "",
        action: str = "",
        template: str = "",
        page: str = "",
    ) -> ServiceResponse:
        """Report a typing mistake; the session id is forwarded to the service."""
        async with self._workflow("typing_mistake", entity_id, session_id) as span:
            raw = await self.gateway.typing_mistake(
                entity_id,
                mistype=mistype,
                session_id=session_id,
                source=source,
                action=action,
                template=template,
                page=page,
            )
            response = self._checked(classify(raw))
            span.error_kind = response.error_kind.value
            return response

    async def _save(
        self,
        entity_id: str,
        sample: str,
        session_id: str,
        parent: Optional[WorkflowContext] = None,
    ) -> ServiceResponse:
        async with self._workflow("save", entity_id, session_id, parent=parent) as span:
            response = self._checked(classify(await self.gateway.submit_profile(entity_id, sample)))

            if response.error_kind == ErrorKind.ENROLLMENT_TOKEN_REQUIRED:
                grant = await self.token_broker.acquire_token(entity_id, TokenScope.SAVE, sample)
                if grant.token is None:
                    response = grant.response
                else:
                    # Single retry; its classification is final whatever it says.
                    span.token_used = True
                    span.retries = 1
                    raw = await self.gateway.submit_profile(entity_id, sample, grant.token.value)
                    response = self._checked(classify(raw))

            span.error_kind = response.error_kind.value
            return response

    async def _evaluate(
        self,
        config: ClientConfig,
        entity_id: str,
        sample: str,
        session_id: str,
        parent: Optional[WorkflowContext] = None,
    ) -> EvaluationResult:
        async with self._workflow("evaluate", entity_id, session_id, parent=parent) as span:
            nonce = classify_text(await self.gateway.request_nonce(dotnet_ticks()))
            response = self._checked(classify(await self.gateway.submit_evaluation(entity_id, sample, nonce)))

            result = EvaluationResult.from_response(entity_id, response)
            if response.ok:
                policy = DecisionPolicy(config)
                result = replace(
                    result,
                    matched=policy.evaluate(
                        matched=result.matched,
                        confidence=result.confidence,
                        fidelity=result.fidelity,
                    ),
                )

            span.error_kind = result.error_kind.value
            span.matched = result.matched
            return result

    async def _enroll_best_effort(
        self,
        entity_id: str,
        sample: str,
        session_id: str,
        *,
        parent: WorkflowContext,
    ) -> None:
        """Attempt a save and discard its outcome.

        Failures are recorded on the parent span and logged, never raised:
        the caller of passive login gets the evaluation-derived result either way.
        """
        parent.enrollment_attempted = True
        try:
            response = await self._save(entity_id, sample, session_id, parent=parent)
        except (TransportError, LicenseError) as exc:
            parent.enrollment_error = type(exc).__name__
            logger.warning(
                {
                    "event": "passive_enrollment_failed",
                    "entity_id": entity_id,
                    "session_id": session_id,
                    "error": str(exc),
                }
            )
            return

        if not response.ok:
            parent.enrollment_error = response.error_kind.value
            logger.warning(
                {
                    "event": "passive_enrollment_rejected",
                    "entity_id": entity_id,
                    "session_id": session_id,
                    "error_kind": response.error_kind.value,
                }
            )

    @staticmethod
    def _checked(response: ServiceResponse) -> ServiceResponse:
        if response.error_kind == ErrorKind.FATAL_LICENSE:
            assert response.error is not None
            raise LicenseError(response.error)
        return response

    @asynccontextmanager
    async def _workflow(
        self,
        name: str,
        entity_id: str,
        session_id: str,
        parent: Optional[WorkflowContext] = None,
    ) -> AsyncIterator[WorkflowContext]:
        span = self.tracer.start_span(workflow=name, entity_id=entity_id, session_id=session_id or None, parent=parent)
        logger.info({"event": "workflow_start", "workflow": name, "entity_id": entity_id, "session_id": session_id})
        try:
            yield span
        except LicenseError:
            span.error_kind = ErrorKind.FATAL_LICENSE.value
            raise
        except TransportError:
            span.error_kind = TRANSPORT_ERROR_KIND
            raise
        finally:
            self.tracer.end_span(span)
            logger.info(
                {
                    "event": "workflow_finish",
                    "workflow": name,
                    "entity_id": entity_id,
                    "session_id": session_id,
                    "error_kind": span.error_kind,
                    "matched": span.matched,
                    "retries": span.retries,
                    "token_used": span.token_used,
                    "duration_ms": span.duration_ms,
                }
            )
            if self.exporter:
                try:
                    await self.exporter.export(span)
                except Exception as exc:
                    logger.warning(
                        {
                            "event": "trace_export_failed",
                            "workflow": name,
                            "entity_id": entity_id,
                            "span_id": span.span_id,
                            "error": str(exc),
                        }
                    )
