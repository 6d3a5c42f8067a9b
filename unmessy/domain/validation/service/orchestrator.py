"""Validation orchestrator: the pipeline state machine.

NORMALIZED -> FORMAT_CHECKED -> SHORT_CIRCUIT_INVALID
                             -> CACHE_AND_ORACLE_PENDING -> RESOLVED
                                -> (RETRY_WITH_SUGGESTION -> RESOLVED)
                                -> PERSISTED

Local checks run synchronously. The cache lookup and the oracle call then run
as two tasks joined under the caller's deadline. A fresh cache hit ends the
wait early; on expiry, pending work is cancelled and treated as absent.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

import logfire

from unmessy.domain.shared.service import Service
from unmessy.domain.validation.error import DomainDenylisted, FormatError
from unmessy.domain.validation.model import (
    CacheLookup,
    Deadline,
    DomainClass,
    NormalizedAddress,
    OracleResult,
    PersistOperation,
    PipelineState,
    SubStatus,
    ValidationRequest,
    ValidationResult,
    ValidationStatus,
    ValidationStep,
)
from unmessy.domain.validation.service.cache_gateway import KnownGoodCacheGateway
from unmessy.domain.validation.service.check_id import CheckIdGenerator
from unmessy.domain.validation.service.domain_classifier import DomainClassifier
from unmessy.domain.validation.service.format import FormatChecker
from unmessy.domain.validation.service.normalizer import Normalizer
from unmessy.domain.validation.service.oracle_client import OracleClient
from unmessy.domain.validation.service.persistence import PersistenceWriter

logger = logging.getLogger(__name__)

Depth = Literal[0, 1]


@dataclass(frozen=True)
class _Pending:
    """What the concurrent stage produced. None means cancelled or not reached."""

    lookup: CacheLookup | None
    oracle: OracleResult | None
    deadline_cut: bool


class ValidationOrchestrator(Service):
    normalizer: Normalizer
    format_checker: FormatChecker
    classifier: DomainClassifier
    cache: KnownGoodCacheGateway
    oracle: OracleClient
    persistence: PersistenceWriter
    check_ids: CheckIdGenerator
    timeout: float = 7.0
    recursion_budget_fraction: float = 0.8
    # Post-verdict writes may overrun the deadline by this much at most
    write_grace: float = 0.1

    def quick_validate(self, request: ValidationRequest) -> ValidationResult:
        """Local-only verdict: normalizer, format checker and domain classifier.

        Never touches the network and never persists. Anything short of a
        terminal local verdict is flagged for recheck.
        """
        steps: list[ValidationStep] = []
        normalized = self._normalize(request, steps)
        try:
            domain_class = self._gate(normalized, steps)
        except (FormatError, DomainDenylisted) as e:
            return self._short_circuit(request, normalized, e, steps)

        if domain_class == DomainClass.ALLOWLISTED:
            status = ValidationStatus.VALID
        else:
            status = ValidationStatus.CHECK_SKIPPED
        return self._build(
            request,
            current_address=normalized.address,
            status=status,
            recheck_needed=True,
            steps=steps,
        )

    async def validate(
        self,
        request: ValidationRequest,
        *,
        deadline: Deadline | None = None,
        depth: Depth = 0,
    ) -> ValidationResult:
        if deadline is None:
            deadline = Deadline.after(request.timeout or self.timeout)

        with logfire.span("validate email", depth=depth) as span:
            steps: list[ValidationStep] = []
            normalized = self._normalize(request, steps)
            self._enter(span, PipelineState.NORMALIZED, depth)

            try:
                domain_class = self._gate(normalized, steps)
            except (FormatError, DomainDenylisted) as e:
                self._enter(span, PipelineState.SHORT_CIRCUIT_INVALID, depth)
                return self._short_circuit(request, normalized, e, steps)
            self._enter(span, PipelineState.FORMAT_CHECKED, depth)

            self._enter(span, PipelineState.CACHE_AND_ORACLE_PENDING, depth)
            pending = await self._cache_and_oracle(
                normalized.address, deadline, skip_oracle=request.skip_oracle
            )
            result = self._resolve(request, normalized, domain_class, pending, steps)
            self._enter(span, PipelineState.RESOLVED, depth)

            suggestion = pending.oracle.suggested_address if pending.oracle else None
            from_cache = bool(pending.lookup and pending.lookup.fresh)
            if suggestion and not from_cache:
                if depth == 0:
                    self._enter(span, PipelineState.RETRY_WITH_SUGGESTION, depth)
                    result = await self._follow_suggestion(request, result, suggestion, deadline)
                    from_cache = False
                    self._enter(span, PipelineState.RESOLVED, depth)
                else:
                    # One level only; hand the suggestion back instead
                    result = result.evolve(suggested_address=suggestion)

            # Heuristic valids stay flagged for recheck and are never written
            confirmed = result.status == ValidationStatus.VALID and not result.recheck_needed
            if depth == 0 and confirmed:
                result = await self._persist(
                    normalized.address, result, deadline, cache=not from_cache
                )
                self._enter(span, PipelineState.PERSISTED, depth)

            span.set_attribute("status", str(result.status))
            return result

    # -- local stages -------------------------------------------------------

    def _normalize(self, request: ValidationRequest, steps: list[ValidationStep]) -> NormalizedAddress:
        normalized = self.normalizer.normalize(request.address)
        if normalized.was_corrected:
            steps.append(
                ValidationStep(
                    step="typo_correction",
                    passed=True,
                    detail={"from": request.address, "to": normalized.address},
                )
            )
        return normalized

    def _gate(self, normalized: NormalizedAddress, steps: list[ValidationStep]) -> DomainClass:
        """Format check then domain classification. Raises on a terminal verdict."""
        problem = self.format_checker.problem(normalized.address)
        steps.append(ValidationStep(step="format_check", passed=problem is None, error=problem))
        if problem is not None:
            raise FormatError(problem)

        domain = normalized.domain or ""
        domain_class = self.classifier.classify(domain)
        denied = domain_class == DomainClass.DENYLISTED
        steps.append(
            ValidationStep(
                step="domain_check",
                passed=not denied,
                error=f"{domain} is denylisted" if denied else None,
                detail={"class": str(domain_class)},
            )
        )
        if denied:
            raise DomainDenylisted(f"{domain} is denylisted")
        return domain_class

    def _short_circuit(
        self,
        request: ValidationRequest,
        normalized: NormalizedAddress,
        error: FormatError | DomainDenylisted,
        steps: list[ValidationStep],
    ) -> ValidationResult:
        logger.debug("Short-circuit %s: %s", normalized.address, error.message)
        return self._build(
            request,
            current_address=normalized.address,
            format_valid=not isinstance(error, FormatError),
            status=ValidationStatus.INVALID,
            sub_status=(
                SubStatus.BAD_FORMAT
                if isinstance(error, FormatError)
                else SubStatus.INVALID_DOMAIN
            ),
            recheck_needed=False,
            steps=steps,
        )

    # -- concurrent stage ---------------------------------------------------

    async def _cache_and_oracle(
        self, address: str, deadline: Deadline, *, skip_oracle: bool
    ) -> _Pending:
        cache_task = asyncio.create_task(self.cache.lookup(address, deadline))
        oracle_task = asyncio.create_task(
            self.oracle.verify(address, deadline, skip=skip_oracle)
        )
        pending: set[asyncio.Task[Any]] = {cache_task, oracle_task}
        lookup: CacheLookup | None = None
        oracle: OracleResult | None = None

        try:
            while pending:
                done, pending = await asyncio.wait(
                    pending,
                    timeout=deadline.remaining(),
                    return_when=asyncio.FIRST_COMPLETED,
                )
                if not done:
                    break
                if cache_task in done:
                    lookup = cache_task.result()
                    if lookup.fresh:
                        break
                if oracle_task in done:
                    oracle = oracle_task.result()
        finally:
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        fresh_hit = bool(lookup and lookup.fresh)
        deadline_cut = bool(pending) and not fresh_hit
        if deadline_cut:
            logger.info("Validation deadline reached with %d stage(s) pending", len(pending))
        return _Pending(lookup=lookup, oracle=None if fresh_hit else oracle, deadline_cut=deadline_cut)

    def _resolve(
        self,
        request: ValidationRequest,
        normalized: NormalizedAddress,
        domain_class: DomainClass,
        pending: _Pending,
        steps: list[ValidationStep],
    ) -> ValidationResult:
        lookup, oracle = pending.lookup, pending.oracle
        steps.append(_cache_step(lookup))
        if oracle is not None or not (lookup and lookup.fresh):
            steps.append(_oracle_step(oracle))
        if pending.deadline_cut:
            steps.append(ValidationStep(step="deadline", passed=False, error="validation deadline elapsed"))

        current = normalized.address
        if lookup and lookup.fresh and lookup.entry:
            return self._build(
                request,
                current_address=lookup.entry.address,
                status=lookup.entry.status,
                sub_status=lookup.entry.sub_status,
                recheck_needed=False,
                steps=steps,
            )

        if oracle is not None and oracle.definitive:
            return self._build(
                request,
                current_address=current,
                status=oracle.status,
                sub_status=oracle.sub_status,
                recheck_needed=False,
                steps=steps,
            )

        if oracle is not None and oracle.status == ValidationStatus.UNKNOWN:
            return self._build(
                request,
                current_address=current,
                status=ValidationStatus.UNKNOWN,
                sub_status=oracle.sub_status,
                recheck_needed=True,
                steps=steps,
            )

        # Heuristic fallback: oracle failed, skipped or cut off by the deadline
        if domain_class == DomainClass.ALLOWLISTED:
            skipped = oracle is not None and oracle.status == ValidationStatus.CHECK_SKIPPED
            return self._build(
                request,
                current_address=current,
                status=ValidationStatus.VALID,
                recheck_needed=pending.deadline_cut or not skipped,
                steps=steps,
            )
        if oracle is None:
            return self._build(
                request,
                current_address=current,
                status=ValidationStatus.UNKNOWN,
                sub_status=SubStatus.VALIDATION_TIMEOUT,
                recheck_needed=True,
                steps=steps,
            )
        return self._build(
            request,
            current_address=current,
            status=oracle.status,
            sub_status=oracle.sub_status,
            recheck_needed=True,
            steps=steps,
        )

    # -- follow-ups ---------------------------------------------------------

    async def _follow_suggestion(
        self,
        request: ValidationRequest,
        result: ValidationResult,
        suggestion: str,
        deadline: Deadline,
    ) -> ValidationResult:
        logger.debug("Re-validating suggestion %s for %s", suggestion, request.address)
        nested = await self.validate(
            request.model_copy(update={"address": suggestion, "timeout": None}),
            deadline=deadline.fraction(self.recursion_budget_fraction),
            depth=1,
        )
        step = ValidationStep(
            step="oracle_suggestion",
            passed=True,
            detail={"suggested": suggestion, "rejected_status": str(result.status)},
        )
        return nested.evolve(
            original_address=request.address,
            steps=(*result.steps, step, *nested.steps),
        )

    async def _persist(
        self, address: str, result: ValidationResult, deadline: Deadline, *, cache: bool
    ) -> ValidationResult:
        write_deadline = deadline.extended(self.write_grace)
        cached: bool | None = None
        if cache:
            outcome, cached = await asyncio.gather(
                self.persistence.upsert(address, result, write_deadline),
                self.cache.remember(address, result, write_deadline),
            )
        else:
            outcome = await self.persistence.upsert(address, result, write_deadline)
        written = outcome.operation in (PersistOperation.INSERTED, PersistOperation.UPDATED)
        return result.with_step(
            ValidationStep(
                step="persist",
                passed=written,
                error=outcome.error,
                detail={
                    "operation": str(outcome.operation),
                    "record_id": outcome.record_id,
                    "cached": cached,
                },
            )
        )

    # -- helpers ------------------------------------------------------------

    def _build(
        self,
        request: ValidationRequest,
        *,
        current_address: str,
        status: ValidationStatus,
        recheck_needed: bool,
        steps: list[ValidationStep],
        sub_status: str | None = None,
        format_valid: bool = True,
    ) -> ValidationResult:
        checked_at = datetime.now(UTC)
        return ValidationResult(
            original_address=request.address,
            current_address=current_address,
            format_valid=format_valid,
            status=status,
            sub_status=sub_status,
            recheck_needed=recheck_needed,
            check_id=self.check_ids.generate(checked_at.timestamp()),
            checked_at=checked_at,
            steps=tuple(steps),
            tracking_id=request.tracking_id,
        )

    @staticmethod
    def _enter(span: Any, state: PipelineState, depth: int) -> None:
        logger.debug("Pipeline state %s (depth=%d)", state, depth)
        span.set_attribute("state", str(state))


def _cache_step(lookup: CacheLookup | None) -> ValidationStep:
    if lookup is None:
        return ValidationStep(step="known_good_check", passed=None, error="cancelled")
    detail: dict[str, Any] = {"found": lookup.found, "fresh": lookup.fresh}
    if lookup.entry is not None:
        detail["check_id"] = lookup.entry.check_id
    return ValidationStep(
        step="known_good_check", passed=lookup.fresh, error=lookup.error, detail=detail
    )


def _oracle_step(oracle: OracleResult | None) -> ValidationStep:
    if oracle is None:
        return ValidationStep(step="oracle_check", passed=None, error="cancelled")
    return ValidationStep(
        step="oracle_check",
        passed=oracle.definitive,
        error=oracle.error,
        detail={
            "status": str(oracle.status),
            "sub_status": oracle.sub_status,
            "attempts": oracle.attempts,
        },
    )
