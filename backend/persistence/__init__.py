from persistence.gateway import PersistenceGateway
from persistence.log_store import LogStore
from persistence.storage import FileProvider, LocalFileProvider

__all__ = ["FileProvider", "LocalFileProvider", "LogStore", "PersistenceGateway"]
