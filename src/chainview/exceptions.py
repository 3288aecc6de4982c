# src/chainview/exceptions.py

class ChainviewError(Exception):
    """Base exception class for explorer errors"""
    pass

class StorageError(ChainviewError):
    """Base exception class for ledger storage errors"""
    pass

class DatabaseError(StorageError):
    """Raised when database operations fail"""
    pass

class NetworkError(ChainviewError):
    """Base exception class for network monitor errors"""
    pass

class NodeRequestError(NetworkError):
    """Raised when a peer node cannot be queried"""
    def __init__(self, url: str, reason: str):
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason

class MonitorUnavailableError(NetworkError):
    """Raised when the network monitor has no consensus height yet"""
    pass

class ConfigError(ChainviewError):
    """Raised when configuration cannot be loaded"""
    pass
