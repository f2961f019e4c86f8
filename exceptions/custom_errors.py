class FileReadingError(Exception):
    """Raised when there is an error reading a spreadsheet file."""

    pass


class FileContentError(Exception):
    """Raised when the content of a spreadsheet file is not as expected."""

    pass


class UnknownEntityError(Exception):
    """Raised when an entity name is not one of clients, workers or tasks."""

    pass


class RuleNotFoundError(Exception):
    """Raised when a rule id is not present in the rule set."""


class DuplicateRuleError(Exception):
    """Raised when a rule is added with an id that already exists in the rule set."""


class InvalidRuleError(Exception):
    """Raised when a payload cannot be parsed into one of the business rule types."""

    def __init__(self, message: str, issues: list[str] | None = None):
        super().__init__(message)
        self.issues = issues or []


class CollaboratorUnavailableError(Exception):
    """Raised when an external service has no endpoint configured."""

    pass


# Mapping of custom exceptions to HTTP status codes
CUSTOM_ERRORS = {
    FileReadingError: 500,
    FileContentError: 400,
    UnknownEntityError: 400,
    RuleNotFoundError: 404,
    DuplicateRuleError: 409,
    InvalidRuleError: 422,
    CollaboratorUnavailableError: 503,
}
