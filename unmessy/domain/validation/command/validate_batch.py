import logfire

from unmessy.domain.shared.command import Command, CommandHandler, Result
from unmessy.domain.shared.error import ValidationError
from unmessy.domain.validation.model import ValidationResult
from unmessy.domain.validation.service import BatchScheduler


class ValidateBatch(Command):
    addresses: list[str] | None = None
    skip_oracle: bool = False


class BatchValidated(Result):
    results: list[ValidationResult]


class ValidateBatchHandler(CommandHandler[ValidateBatch, BatchValidated]):
    scheduler: BatchScheduler

    async def run(self, cmd: ValidateBatch) -> BatchValidated:
        if cmd.addresses is None:
            raise ValidationError("addresses is required", field="addresses")

        with logfire.span("ValidateBatch"):
            results = await self.scheduler.run(cmd.addresses, skip_oracle=cmd.skip_oracle)
            logfire.info("Batch validated", size=len(results))
            return BatchValidated(results=results)
