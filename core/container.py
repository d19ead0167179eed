"""
Dependency Injection Container.
"""

from typing import Any, Callable, Dict, Type, TypeVar

T = TypeVar("T")


class Container:
    """
    Simple Dependency Injection Container.
    """

    _instances: Dict[Type, Any] = {}
    _providers: Dict[Type, Callable[[], Any]] = {}

    @classmethod
    def register(cls, interface: Type[T], instance: Any) -> None:
        """Register a singleton instance for an interface."""
        cls._instances[interface] = instance

    @classmethod
    def register_factory(cls, interface: Type[T], factory: Callable[[], T]) -> None:
        """Register a factory for an interface."""
        cls._providers[interface] = factory

    @classmethod
    def resolve(cls, interface: Type[T]) -> T:
        """Resolve an interface to its implementation."""
        if interface in cls._instances:
            return cls._instances[interface]
        if interface in cls._providers:
            return cls._providers[interface]()
        raise KeyError(f"No provider registered for {interface.__name__}")

    @classmethod
    def is_registered(cls, interface: Type) -> bool:
        return interface in cls._instances or interface in cls._providers

    @classmethod
    def clear(cls):
        """Clear all registrations (useful for testing)."""
        cls._instances.clear()
        cls._providers.clear()


def bootstrap_container():
    """
    Initialize the dependency injection container.
    Register all dependencies here.
    """
    from adapters.archive import ZipArchiveWriter
    from adapters.minio import MinioBlobStore, MinioUrlSigner
    from core.config import get_settings
    from core.logger import logger
    from core.storage import get_minio_client
    from ports.storage import ArchiveWriterPort, BlobStorePort, UrlSignerPort
    from services.storage_gateway import StorageGateway

    settings = get_settings()
    minio_client = get_minio_client()

    blob_store = MinioBlobStore(minio_client, settings)
    url_signer = MinioUrlSigner(minio_client)

    def archive_factory() -> ArchiveWriterPort:
        return ZipArchiveWriter(
            compression_level=settings.archive_compression_level,
            read_chunk_size=settings.archive_read_chunk_size,
        )

    Container.register(BlobStorePort, blob_store)
    Container.register(UrlSignerPort, url_signer)
    Container.register_factory(ArchiveWriterPort, archive_factory)
    Container.register(
        StorageGateway,
        StorageGateway(
            blob_store,
            url_signer,
            lambda: Container.resolve(ArchiveWriterPort),
            settings,
        ),
    )
    logger.info("Dependency container bootstrapped")
