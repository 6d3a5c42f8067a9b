from unmessy.domain.validation.service.batch import BatchScheduler
from unmessy.domain.validation.service.cache_gateway import KnownGoodCacheGateway
from unmessy.domain.validation.service.check_id import CheckIdGenerator
from unmessy.domain.validation.service.domain_classifier import DomainClassifier
from unmessy.domain.validation.service.format import FormatChecker
from unmessy.domain.validation.service.normalizer import Normalizer
from unmessy.domain.validation.service.oracle_client import OracleClient
from unmessy.domain.validation.service.orchestrator import ValidationOrchestrator
from unmessy.domain.validation.service.persistence import PersistenceWriter

__all__ = [
    "BatchScheduler",
    "CheckIdGenerator",
    "DomainClassifier",
    "FormatChecker",
    "KnownGoodCacheGateway",
    "Normalizer",
    "OracleClient",
    "PersistenceWriter",
    "ValidationOrchestrator",
]
