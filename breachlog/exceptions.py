"""Breach Log Analyzer - Errors"""


class AnalyzerError(Exception):
    """Base class for analysis failures"""


class UnreadableInputError(AnalyzerError):
    """The log content could not be read"""

    def __init__(self, path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot read log file {self.path}: {reason}")
