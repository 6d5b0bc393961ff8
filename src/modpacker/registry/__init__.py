from .store import (
    REGISTRY_FILENAME,
    InMemoryRegistryStore,
    JsonRegistryStore,
    Registry,
    RegistryStore,
    load_auth,
    save_auth,
)

__all__ = [
    "REGISTRY_FILENAME",
    "InMemoryRegistryStore",
    "JsonRegistryStore",
    "Registry",
    "RegistryStore",
    "load_auth",
    "save_auth",
]
