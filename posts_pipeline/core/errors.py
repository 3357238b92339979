"""
Error kinds raised by pipeline stages.

Every stage raises a subclass of PipelineError; the top-level run functions
catch PipelineError, log it and report failure.
"""


class PipelineError(Exception):
    """Base class for all stage-level failures."""

    def __init__(self, stage: str, message: str):
        self.stage = stage
        self.message = message
        super().__init__(f"[{stage}] {message}")


class FileReadError(PipelineError):
    """Raised when the input file is missing or unreadable."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__("read", f"{path}: {message}")


class XmlParseError(PipelineError):
    """Raised when the input file is not well-formed XML."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__("parse", f"{path}: {message}")


class StoreConnectionError(PipelineError):
    """Raised when the document store cannot be reached."""

    def __init__(self, message: str):
        super().__init__("connect", message)


class StoreOperationError(PipelineError):
    """Raised when a delete, insert or query against the store fails."""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__("store", f"{operation} failed: {message}")


class RenderError(PipelineError):
    """Raised when a report document cannot be written."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__("render", f"{path}: {message}")
