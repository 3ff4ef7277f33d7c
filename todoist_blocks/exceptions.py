"""
Exception types for todoist-blocks.

Query parse failures are returned as values by the parser; everything
here is raised by the client, the orchestrator preconditions, or the
host layer.
"""


class TodoistBlocksError(Exception):
    """Base class for all todoist-blocks errors."""


class AuthenticationError(TodoistBlocksError):
    """Raised when the Todoist API token is missing, invalid or revoked."""


class IntegrationError(TodoistBlocksError):
    """Raised when a Todoist API call fails."""


class RateLimitError(TodoistBlocksError):
    """Raised when the Todoist API rate limit is hit."""


class PreconditionError(TodoistBlocksError):
    """Raised when a retrieval mode is missing the input it needs."""
