from __future__ import annotations


class AdminApiError(RuntimeError):
    """Base class for every failure the admin console surfaces to the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class FetchError(AdminApiError):
    pass


class FetchHttpStatusError(FetchError):
    def __init__(self, status_code: int, server_message: str | None = None) -> None:
        super().__init__(server_message or f"Request failed with status {status_code}")
        self.status_code = status_code
        self.server_message = server_message


class FetchParseError(FetchError):
    def __init__(self, message: str = "Server returned an unreadable response.") -> None:
        super().__init__(message)


class FetchNetworkError(FetchError):
    def __init__(self, reason: str) -> None:
        super().__init__("Network or server error.")
        self.reason = reason


class MutationError(AdminApiError):
    pass


class MutationValidationError(MutationError):
    def __init__(self, field: str, message: str | None = None) -> None:
        super().__init__(message or f"{field} is required.")
        self.field = field


class MutationRemoteError(MutationError):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code


class MutationNetworkError(MutationError):
    def __init__(self, reason: str) -> None:
        super().__init__("Network or server error.")
        self.reason = reason


class ModalTransitionError(AdminApiError):
    def __init__(self, action: str, state: str) -> None:
        super().__init__(f"cannot {action} while {state}")
        self.action = action
        self.state = state
