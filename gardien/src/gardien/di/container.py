"""
Dependency Injection Container for Gardien.

Builds one ChallengeOrchestrator per process with its store clients.
"""

from typing import Optional

from gardien.application.services.challenge_orchestrator import (
    ChallengeOrchestrator,
)
from gardien.application.use_cases.generate_challenge import GenerateChallenge
from gardien.application.use_cases.get_binding import GetBinding
from gardien.application.use_cases.unlink_wallet import UnlinkWallet
from gardien.application.use_cases.validate_session import ValidateSession
from gardien.application.use_cases.verify_challenge import VerifyChallenge
from gardien.config.settings import Settings, get_settings
from gardien.domain.repositories.i_binding_registry import IBindingRegistry
from gardien.domain.repositories.i_challenge_store import IChallengeStore
from gardien.domain.services.i_session_issuer import ISessionIssuer
from gardien.domain.services.i_signature_verifier import ISignatureVerifier
from gardien.domain.services.message_builder import MessageBuilder
from gardien.infrastructure.auth.eth_signature_verifier import EthSignatureVerifier
from gardien.infrastructure.auth.jwt_session_issuer import JwtSessionIssuer
from gardien.infrastructure.cache.cache_binding_registry import CacheBindingRegistry
from gardien.infrastructure.cache.challenge_store import RedisChallengeStore
from gardien.infrastructure.cache.i_cache_client import ICacheClient
from gardien.infrastructure.cache.in_memory_cache_client import InMemoryCacheClient
from gardien.infrastructure.cache.redis_cache_client import RedisCacheClient
from gardien.infrastructure.monitoring.logger import get_logger
from gardien.infrastructure.persistence.database import Database
from gardien.infrastructure.persistence.models import Base
from gardien.infrastructure.persistence.repositories.binding_registry import (
    SqlBindingRegistry,
)
from gardien.infrastructure.rate_limiting.rate_limiter import RateLimiter

logger = get_logger(__name__)


class DIContainer:
    """
    Dependency Injection Container.

    Lazily builds singleton instances of all services and stores.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        cache_client: Optional[ICacheClient] = None,
    ):
        """
        Initialize container with None instances.

        Args:
            settings: Settings override (defaults to global settings)
            cache_client: Key-value store override (tests)
        """
        self._settings = settings

        # Infrastructure
        self._database: Optional[Database] = None
        self._cache_client: Optional[ICacheClient] = cache_client

        # Stores
        self._challenge_store: Optional[IChallengeStore] = None
        self._binding_registry: Optional[IBindingRegistry] = None
        self._rate_limiter: Optional[RateLimiter] = None

        # Domain Services
        self._message_builder: Optional[MessageBuilder] = None
        self._signature_verifier: Optional[ISignatureVerifier] = None
        self._session_issuer: Optional[ISessionIssuer] = None

        # Application
        self._orchestrator: Optional[ChallengeOrchestrator] = None

    @property
    def settings(self) -> Settings:
        """Get settings used by this container."""
        return self._settings or get_settings()

    @property
    def uses_database(self) -> bool:
        return self.settings.BINDING_BACKEND == "database"

    async def initialize(self) -> None:
        """Initialize all services and establish connections."""
        if self.uses_database:
            await self.database.connect()
            await self.database.create_schema(Base.metadata)

        await self.cache_client.connect()

        logger.info(
            f"Container initialized (bindings={self.settings.BINDING_BACKEND}, "
            f"redis={self.settings.REDIS_ENABLED})"
        )

    async def shutdown(self) -> None:
        """Cleanup resources and close connections."""
        if self._database:
            await self._database.disconnect()

        if self._cache_client:
            await self._cache_client.disconnect()

    # Infrastructure Getters

    @property
    def database(self) -> Database:
        """Get database instance."""
        if self._database is None:
            self._database = Database(
                database_url=self.settings.DATABASE_URL,
                echo=self.settings.DATABASE_ECHO,
            )
        return self._database

    @property
    def cache_client(self) -> ICacheClient:
        """Get key-value store client (Redis, or in-memory when disabled)."""
        if self._cache_client is None:
            if self.settings.REDIS_ENABLED:
                self._cache_client = RedisCacheClient(
                    host=self.settings.REDIS_HOST,
                    port=self.settings.REDIS_PORT,
                    db=self.settings.REDIS_DB,
                    password=self.settings.REDIS_PASSWORD or None,
                    timeout=self.settings.STORE_TIMEOUT_SECONDS,
                )
            else:
                logger.warning("REDIS_ENABLED=false: using in-process store")
                self._cache_client = InMemoryCacheClient()
        return self._cache_client

    # Store Getters

    @property
    def challenge_store(self) -> IChallengeStore:
        if self._challenge_store is None:
            self._challenge_store = RedisChallengeStore(self.cache_client)
        return self._challenge_store

    @property
    def binding_registry(self) -> IBindingRegistry:
        """Get binding registry for the configured backend."""
        if self._binding_registry is None:
            if self.uses_database:
                self._binding_registry = SqlBindingRegistry(
                    self.database,
                    timeout=self.settings.DATABASE_TIMEOUT,
                )
            else:
                self._binding_registry = CacheBindingRegistry(self.cache_client)
        return self._binding_registry

    @property
    def rate_limiter(self) -> RateLimiter:
        if self._rate_limiter is None:
            self._rate_limiter = RateLimiter(
                self.cache_client,
                max_attempts=self.settings.RATE_LIMIT_ATTEMPTS,
                window_seconds=self.settings.RATE_LIMIT_WINDOW_SECONDS,
            )
        return self._rate_limiter

    # Domain Service Getters

    @property
    def message_builder(self) -> MessageBuilder:
        if self._message_builder is None:
            self._message_builder = MessageBuilder(self.settings.SERVICE_NAME)
        return self._message_builder

    @property
    def signature_verifier(self) -> ISignatureVerifier:
        if self._signature_verifier is None:
            self._signature_verifier = EthSignatureVerifier()
        return self._signature_verifier

    @property
    def session_issuer(self) -> ISessionIssuer:
        if self._session_issuer is None:
            self._session_issuer = JwtSessionIssuer(
                secret_key=self.settings.SESSION_SECRET_KEY,
                algorithm=self.settings.SESSION_ALGORITHM,
                expiration_days=self.settings.SESSION_EXPIRATION_DAYS,
            )
        return self._session_issuer

    # Application Getters

    @property
    def orchestrator(self) -> ChallengeOrchestrator:
        """Get challenge orchestrator with all use cases wired."""
        if self._orchestrator is None:
            self._orchestrator = ChallengeOrchestrator(
                generate_challenge=GenerateChallenge(
                    rate_limiter=self.rate_limiter,
                    challenge_store=self.challenge_store,
                    binding_registry=self.binding_registry,
                    message_builder=self.message_builder,
                    ttl_seconds=self.settings.CHALLENGE_TTL_SECONDS,
                    supported_platforms=self.settings.SUPPORTED_PLATFORMS,
                ),
                verify_challenge=VerifyChallenge(
                    challenge_store=self.challenge_store,
                    signature_verifier=self.signature_verifier,
                    binding_registry=self.binding_registry,
                    session_issuer=self.session_issuer,
                    message_builder=self.message_builder,
                ),
                unlink_wallet=UnlinkWallet(self.binding_registry),
                get_binding=GetBinding(self.binding_registry),
                validate_session=ValidateSession(
                    self.session_issuer,
                    self.binding_registry,
                ),
            )
        return self._orchestrator

    async def health(self) -> dict:
        """Report reachability of backing stores."""
        status = {"cache": await self.cache_client.ping()}
        if self.uses_database:
            status["database"] = await self.database.health_check()
        return status


# Global container instance
_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """Get global DI container instance."""
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


def set_container(container: Optional[DIContainer]) -> None:
    """Replace global container (tests)."""
    global _container
    _container = container


async def initialize_container() -> DIContainer:
    """Initialize and return DI container."""
    container = get_container()
    await container.initialize()
    return container


async def shutdown_container() -> None:
    """Shutdown DI container."""
    container = get_container()
    await container.shutdown()
