class GalaxyExportError(Exception):
    """Base class for failures that abort an export run."""


class FetchError(Exception):
    def __init__(self, address: str, stage, reason: str):
        super().__init__(f"Failed to {stage.value} from {address}: {reason}")
        self.address = address
        self.stage = stage
        self.reason = reason


class EmptyResultError(GalaxyExportError):
    def __init__(self, requested: int = 0):
        super().__init__("No systems retrieved!")
        self.requested = requested


class SerializationError(GalaxyExportError):
    pass


class OutputWriteError(GalaxyExportError):
    pass
