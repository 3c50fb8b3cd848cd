"""
Error kinds raised by the user and thread data-access actions.

Each action catches store errors once, at its own boundary, and re-raises them
as exactly one of the kinds below. The message is always "<prefix>: <detail>".
"""


class ThreadsError(Exception):
    """Base class for all data-access failures."""

    prefix: str = "Operation failed"

    def __init__(self, detail: str = "", operation: str = ""):
        self.detail = detail
        self.operation = operation
        message = self.prefix
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ConnectionFailure(ThreadsError):
    """Raised when the MongoDB connection cannot be established."""

    prefix = "Failed to connect to MongoDB"

    def __init__(self, detail: str = ""):
        super().__init__(detail, operation="connect")


class WriteFailure(ThreadsError):
    """Raised when a user profile cannot be created or updated."""

    prefix = "Failed to create/update user"

    def __init__(self, detail: str = ""):
        super().__init__(detail, operation="update_user")


class ReadFailure(ThreadsError):
    """Raised when a single user cannot be fetched."""

    prefix = "Failed to fetch user"

    def __init__(self, detail: str = ""):
        super().__init__(detail, operation="fetch_user")


class SearchFailure(ThreadsError):
    """Raised when the user search query fails."""

    prefix = "Failed to fetch users"

    def __init__(self, detail: str = ""):
        super().__init__(detail, operation="fetch_users")


class AggregationFailure(ThreadsError):
    """Raised when a user's threads cannot be fetched and expanded."""

    prefix = "Error in fetching user posts"

    def __init__(self, detail: str = ""):
        super().__init__(detail, operation="fetch_user_posts")


class ActivityFailure(ThreadsError):
    """Raised when the activity feed cannot be computed."""

    prefix = "Error in fetching activity"

    def __init__(self, detail: str = ""):
        super().__init__(detail, operation="get_activity")
