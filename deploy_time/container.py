"""Dependency Injection container - initialized at app startup."""

from deploy_time.repositories import DeploymentCacheRepository
from deploy_time.services import DeploymentDetector, EndpointManager


class Container:
    """Application DI container - holds all singleton instances."""

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def init(self, with_endpoints: bool = True) -> None:
        """Initialize all dependencies. Call once at app startup.

        Cache-only commands pass ``with_endpoints=False`` so they work without
        any RPC configuration.
        """
        if self._initialized:
            return

        # Repositories (singletons)
        self.cache = DeploymentCacheRepository()

        if with_endpoints:
            # Raises ConfigurationError when MAIN_RPC_URL is missing
            self.endpoints = EndpointManager.from_settings()
            self.detector = DeploymentDetector(endpoints=self.endpoints, cache=self.cache)

        self._initialized = True

    def reset(self) -> None:
        """Drop all singletons so the next ``init`` rebuilds them."""
        for name in ("cache", "endpoints", "detector"):
            self.__dict__.pop(name, None)
        self._initialized = False


# Global container instance
container = Container()
