"""Exception hierarchy for the AI service layer.

Missing required fields are not an exception at the parsing level:
``validate()`` returns False and the task services decide what to do.
"""


class AIServiceError(Exception):
    """Base class for everything raised by recruit_ai."""


class ConfigurationError(AIServiceError):
    """A required environment-sourced setting is missing."""


class UnknownTaskError(AIServiceError):
    """Requested task is not one of the known prompt tasks."""

    def __init__(self, task: object):
        self.task = task
        super().__init__(f"Unknown prompt task: {task!r}")


class ExtractionError(AIServiceError):
    """Provider returned output that could not be turned into a payload."""


class PayloadNotFoundError(ExtractionError):
    """No brace-delimited region in the provider output."""


class PayloadDecodeError(ExtractionError):
    """A candidate region was found but is not valid JSON."""


class PayloadShapeError(ExtractionError):
    """Decoded payload has the required keys but values of the wrong type."""


class CompletionError(AIServiceError):
    """The completion gateway returned no usable text."""


class IncompleteResponseError(AIServiceError):
    """Decoded payload is missing fields the task requires."""

    def __init__(self, task: str, missing: list[str]):
        self.task = task
        self.missing = missing
        super().__init__(
            f"AI response for {task} missing required fields: {', '.join(missing)}"
        )
