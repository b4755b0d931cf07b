"""
Exporter exceptions.
"""


class ExportError(Exception):
    """Base exception for all export failures"""
    pass


class InvalidBookError(ExportError):
    """The book model is missing or fails validation; nothing was produced"""
    pass


class SerializationError(ExportError):
    """Building the output container or document failed"""
    def __init__(self, format_name: str, message: str):
        self.format_name = format_name
        super().__init__(f"[{format_name}] {message}")


class ExportInProgressError(ExportError):
    """Another export is already running on this exporter"""
    pass
