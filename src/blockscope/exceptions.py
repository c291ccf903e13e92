# src/blockscope/exceptions.py
from enum import Enum
from typing import Any, Dict


class ErrorCode(str, Enum):
    """Machine-readable error codes shared with the surrounding services."""
    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_URL = "INVALID_URL"
    FETCH_FAILED = "FETCH_FAILED"
    SELECTOR_NOT_FOUND = "SELECTOR_NOT_FOUND"
    PARSE_ERROR = "PARSE_ERROR"
    ANALYSIS_FAILED = "ANALYSIS_FAILED"
    GENERATION_FAILED = "GENERATION_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class BlockGeneratorError(Exception):
    """
    Base class for every error raised by blockscope.
    Carries an ErrorCode and an HTTP-style status code for callers that
    expose the engine over a service boundary.
    """

    def __init__(self, message: str, code: ErrorCode, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        """Renders the error as the standard failure payload."""
        return {"success": False, "error": self.message, "code": self.code.value}


class AnalysisFailed(BlockGeneratorError):
    """Unexpected failure while analyzing a layout."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.ANALYSIS_FAILED)


class ParseError(BlockGeneratorError):
    """Markup or render geometry could not be turned into a tree."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.PARSE_ERROR)


class SelectorNotFound(BlockGeneratorError):
    def __init__(self, selector: str):
        super().__init__(f'Selector "{selector}" did not match any elements', ErrorCode.SELECTOR_NOT_FOUND)
        self.selector = selector
