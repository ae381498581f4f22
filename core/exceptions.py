from typing import Optional


class TriviaError(Exception):
    """Base error for everything the quiz client reports to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NetworkError(TriviaError):
    """Transport failure, including an empty response."""
    pass


class DecodeError(TriviaError):
    """Response body was not the JSON we expected."""
    pass


class ApiError(TriviaError):
    """Well-formed response whose response_code signals a failure."""

    def __init__(self, code: int, message: Optional[str] = None):
        super().__init__(message or f"API Error: Response code {code}")
        self.code = code


class ValidationError(TriviaError):
    """Caller-supplied parameter out of range."""
    pass


class QuizStateError(TriviaError):
    """Operation not allowed in the current quiz phase."""
    pass
