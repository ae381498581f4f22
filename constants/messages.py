class Messages:
    """User-facing copy shown by the quiz screen."""

    DEFAULT_LANG = "EN"

    _MESSAGES = {
        "EN": {
            "INVALID_QUESTION_COUNT": "Please enter a valid number of questions ({min}-{max})",
            "INVALID_TIMER_DURATION": "Timer duration must be between {min} and {max} seconds",
            "TIMER_NOT_POSITIVE": "Timer duration must be a positive number of seconds",
            "INVALID_URL": "Invalid URL",
            "CATEGORIES_FETCH_FAILED": "Failed to fetch categories: {error}",
            "CATEGORIES_NO_DATA": "No category data received",
            "CATEGORIES_DECODE_FAILED": "Failed to decode categories: {error}",
            "QUESTIONS_FETCH_FAILED": "{error}",
            "QUESTIONS_NO_DATA": "No data received",
            "QUESTIONS_DECODE_FAILED": "Failed to decode response: {error}",
            "API_ERROR": "API Error: Response code {code}",
            "FETCH_IN_PROGRESS": "Questions are already being loaded",
            "EMPTY_QUESTIONS": "Cannot start a quiz without questions",
            "INVALID_TRANSITION": "Cannot {action} while the quiz is {phase}",
            "TIME_UP_TITLE": "Time's Up!",
            "TIME_UP_BODY": "Your answers will be automatically submitted.",
            "RESULTS_TITLE": "Quiz Results",
            "RESULTS_SUMMARY": "You got {correct} out of {total} questions correct!",
            "RESULTS_PERCENT": "Your score: {percent}%",
        },
    }

    # Descriptions of the response_code values documented by Open Trivia DB
    API_RESPONSE_CODES = {
        1: "No Results: the API doesn't have enough questions for your query",
        2: "Invalid Parameter: arguments passed in aren't valid",
        3: "Token Not Found: session token does not exist",
        4: "Token Empty: session token has returned all possible questions",
        5: "Rate Limit: too many requests have occurred",
    }

    @classmethod
    def get(cls, key: str, lang: str = DEFAULT_LANG) -> str:
        table = cls._MESSAGES.get(lang) or cls._MESSAGES[cls.DEFAULT_LANG]
        return table.get(key, cls._MESSAGES[cls.DEFAULT_LANG].get(key, key))

    @classmethod
    def describe_api_code(cls, code: int) -> str:
        return cls.API_RESPONSE_CODES.get(code, "Unknown response code")
