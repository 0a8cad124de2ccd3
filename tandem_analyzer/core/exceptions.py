

class TandemAnalyzerError(Exception):
    """Base exception for all tandem_analyzer errors"""
    pass

class ConfigError(TandemAnalyzerError):
    """Invalid or inconsistent global.json"""
    pass

class PersistenceError(TandemAnalyzerError):
    """
    A key-value backend could not read or write a value
    (directory unavailable, I/O error, rejected key, etc)
    """
    pass

class StorageQuotaExceededError(PersistenceError):
    """Writing a value would push the backend over its size quota"""
    pass
