from dishka import provide

from unmessy.config import Config
from unmessy.domain.validation.command import ValidateBatchHandler, ValidateEmailHandler
from unmessy.domain.validation.port import (
    KnownGoodCache,
    ValidationRecordRepository,
    VerificationOracle,
)
from unmessy.domain.validation.service import (
    BatchScheduler,
    CheckIdGenerator,
    DomainClassifier,
    FormatChecker,
    KnownGoodCacheGateway,
    Normalizer,
    OracleClient,
    PersistenceWriter,
    ValidationOrchestrator,
)
from unmessy.util.di.base import Provider
from unmessy.util.di.scope import Scope


class ValidationProvider(Provider):
    # Handlers are per unit of work; the pipeline itself lives for the app
    validate_email_handler = provide(ValidateEmailHandler, scope=Scope.UOW)
    validate_batch_handler = provide(ValidateBatchHandler, scope=Scope.UOW)

    format_checker = provide(FormatChecker, scope=Scope.APP)

    @provide(scope=Scope.APP)
    def get_normalizer(self, config: Config) -> Normalizer:
        return Normalizer(
            remove_aliases=config.normalization.remove_aliases,
            normalize_country_tlds=config.normalization.normalize_country_tlds,
        )

    @provide(scope=Scope.APP)
    def get_classifier(self, config: Config) -> DomainClassifier:
        return DomainClassifier(
            extra_allow=frozenset(config.domains.allow),
            extra_deny=frozenset(config.domains.deny),
        )

    @provide(scope=Scope.APP)
    def get_check_ids(self, config: Config) -> CheckIdGenerator:
        return CheckIdGenerator(
            client_id=config.check_id.client_id, version=config.check_id.version
        )

    @provide(scope=Scope.APP)
    def get_cache_gateway(self, cache: KnownGoodCache, config: Config) -> KnownGoodCacheGateway:
        return KnownGoodCacheGateway(
            cache=cache,
            timeout=config.timeouts.cache,
            freshness_days=config.cache.freshness_days,
            ttl_days=config.cache.ttl_days,
        )

    @provide(scope=Scope.APP)
    def get_oracle_client(self, oracle: VerificationOracle, config: Config) -> OracleClient:
        return OracleClient(
            oracle=oracle,
            enabled=config.oracle.enabled,
            max_retries=config.oracle.max_retries,
            backoff_base=config.oracle.backoff_base,
            timeout=config.timeouts.oracle,
            retry_timeout=config.timeouts.oracle_retry,
            reserve=config.timeouts.reserve,
        )

    @provide(scope=Scope.APP)
    def get_persistence_writer(
        self, repository: ValidationRecordRepository, config: Config
    ) -> PersistenceWriter:
        return PersistenceWriter(repository=repository, timeout=config.timeouts.persistence)

    @provide(scope=Scope.APP)
    def get_orchestrator(
        self,
        normalizer: Normalizer,
        format_checker: FormatChecker,
        classifier: DomainClassifier,
        cache: KnownGoodCacheGateway,
        oracle: OracleClient,
        persistence: PersistenceWriter,
        check_ids: CheckIdGenerator,
        config: Config,
    ) -> ValidationOrchestrator:
        return ValidationOrchestrator(
            normalizer=normalizer,
            format_checker=format_checker,
            classifier=classifier,
            cache=cache,
            oracle=oracle,
            persistence=persistence,
            check_ids=check_ids,
            timeout=config.timeouts.validation,
            recursion_budget_fraction=config.validation.recursion_budget_fraction,
        )

    @provide(scope=Scope.APP)
    def get_batch_scheduler(
        self, orchestrator: ValidationOrchestrator, config: Config
    ) -> BatchScheduler:
        return BatchScheduler(
            orchestrator=orchestrator,
            budget=config.timeouts.batch,
            item_budget=config.timeouts.batch_item,
            max_size=config.batch.max_size,
        )
