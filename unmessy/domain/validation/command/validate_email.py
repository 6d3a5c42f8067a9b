import logfire

from unmessy.domain.shared.command import Command, CommandHandler, Result
from unmessy.domain.shared.error import ValidationError
from unmessy.domain.validation.model import ValidationRequest, ValidationResult
from unmessy.domain.validation.service import ValidationOrchestrator


class ValidateEmail(Command):
    address: str | None = None
    tracking_id: str | None = None
    skip_oracle: bool = False
    timeout: float | None = None


class EmailValidated(Result):
    result: ValidationResult


class ValidateEmailHandler(CommandHandler[ValidateEmail, EmailValidated]):
    orchestrator: ValidationOrchestrator

    async def run(self, cmd: ValidateEmail) -> EmailValidated:
        if cmd.address is None or not cmd.address.strip():
            raise ValidationError("An email address is required", field="address")
        if cmd.timeout is not None and cmd.timeout <= 0:
            raise ValidationError("timeout must be positive", field="timeout")

        with logfire.span("ValidateEmail"):
            result = await self.orchestrator.validate(
                ValidationRequest(
                    address=cmd.address,
                    tracking_id=cmd.tracking_id,
                    skip_oracle=cmd.skip_oracle,
                    timeout=cmd.timeout,
                )
            )
            logfire.info(
                "Email validated",
                status=str(result.status),
                check_id=result.check_id,
                recheck_needed=result.recheck_needed,
            )
            return EmailValidated(result=result)
