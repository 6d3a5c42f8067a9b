from unmessy.domain.validation.command.validate_batch import (
    BatchValidated,
    ValidateBatch,
    ValidateBatchHandler,
)
from unmessy.domain.validation.command.validate_email import (
    EmailValidated,
    ValidateEmail,
    ValidateEmailHandler,
)

__all__ = [
    "BatchValidated",
    "EmailValidated",
    "ValidateBatch",
    "ValidateBatchHandler",
    "ValidateEmail",
    "ValidateEmailHandler",
]
