import logging
from typing import Sequence

import logfire

from unmessy.domain.shared.error import ValidationError
from unmessy.domain.shared.service import Service
from unmessy.domain.validation.model import Deadline, ValidationRequest, ValidationResult
from unmessy.domain.validation.service.orchestrator import ValidationOrchestrator

logger = logging.getLogger(__name__)


class BatchScheduler(Service):
    """Validates addresses one after another under a shared batch deadline.

    Each item gets ``min(item_budget, remaining / remaining_items)``. Once
    less than half an item budget is left, the rest of the batch falls back
    to local-only checks.
    """

    orchestrator: ValidationOrchestrator
    budget: float = 5.0
    item_budget: float = 2.0
    max_size: int = 100

    async def run(
        self, addresses: Sequence[str], *, skip_oracle: bool = False
    ) -> list[ValidationResult]:
        if len(addresses) > self.max_size:
            raise ValidationError(
                f"Batch of {len(addresses)} addresses exceeds the limit of {self.max_size}",
                field="addresses",
            )
        if not addresses:
            return []

        total = len(addresses)
        deadline = Deadline.after(min(self.budget, total * self.item_budget))
        results: list[ValidationResult] = []
        degraded = 0

        with logfire.span("validate batch", size=total):
            for index, address in enumerate(addresses):
                request = ValidationRequest(address=address, skip_oracle=skip_oracle)
                if not address.strip():
                    # Blank entries still get a position: a local bad_format verdict
                    results.append(self.orchestrator.quick_validate(request))
                    continue
                remaining = deadline.remaining()
                if remaining < self.item_budget / 2:
                    results.append(self.orchestrator.quick_validate(request))
                    degraded += 1
                    continue
                item_slice = min(self.item_budget, remaining / (total - index))
                results.append(
                    await self.orchestrator.validate(request, deadline=Deadline.after(item_slice))
                )

        if degraded:
            logger.info("Batch budget exhausted: %d of %d addresses checked locally", degraded, total)
        return results
