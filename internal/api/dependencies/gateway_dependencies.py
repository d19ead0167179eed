"""
Storage gateway dependencies.
"""

from core.container import Container, bootstrap_container
from services.storage_gateway import StorageGateway


def get_storage_gateway() -> StorageGateway:
    """Get the container-managed StorageGateway, bootstrapping on first use."""
    if not Container.is_registered(StorageGateway):
        bootstrap_container()
    return Container.resolve(StorageGateway)
