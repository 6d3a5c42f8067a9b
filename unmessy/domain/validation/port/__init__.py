from unmessy.domain.validation.port.known_good_cache import KnownGoodCache
from unmessy.domain.validation.port.oracle import VerificationOracle
from unmessy.domain.validation.port.repository import ValidationRecordRepository

__all__ = [
    "KnownGoodCache",
    "ValidationRecordRepository",
    "VerificationOracle",
]
