from typing import Optional


class MdCollectError(Exception):
    # base exception for all application-specific errors.
    pass

class ConfigError(MdCollectError):
    # errors related to configuration.
    pass

class DiscoveryError(MdCollectError):
    # errors that stop the directory walk from starting.
    pass

class OutputError(MdCollectError):
    # errors writing to the output sink.
    def __init__(self, message: str, stage: Optional[str] = None, relative_path: Optional[str] = None):
        super().__init__(message)
        self.stage = stage
        self.relative_path = relative_path
