class HolderMapError(Exception):
    pass


class DataSourceError(HolderMapError):
    pass


class RateLimitError(DataSourceError):
    pass


class ProviderNotFoundError(DataSourceError):
    pass


class UnsupportedChainError(HolderMapError):
    pass
