"""Exceptions raised while analyzing a workbook."""

from pathlib import Path
from typing import Optional, Union


class AnalysisError(Exception):
    """Base class for fatal analysis failures."""

    pass


class InputNotFoundError(AnalysisError):
    """Raised when the input workbook path does not exist."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"File not found: {self.path}")


class InputUnreadableError(AnalysisError):
    """Raised when the workbook container cannot be parsed."""

    def __init__(self, path: Union[str, Path], reason: Optional[str] = None):
        self.path = Path(path)
        self.reason = reason
        message = f"Unable to read workbook: {self.path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class EmptyCorpusError(AnalysisError):
    """Raised when there are no formulas to classify or report on."""

    def __init__(self, message: str = "No formulas found to analyze"):
        super().__init__(message)
