"""Error types shared across the service layer."""


class LoopRuleViolation(Exception):
    """Raised when a business rule rejects a command."""

    status_code = 400

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code


class UserNotFound(LoopRuleViolation):
    status_code = 404

    def __init__(self, user_id: str) -> None:
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class AccountBanned(LoopRuleViolation):
    status_code = 403

    def __init__(self, detail: str = "Your account has been deactivated.") -> None:
        super().__init__(detail)


class PersistenceFailure(Exception):
    """Raised when the snapshot cannot be read from or written to storage."""


class SnapshotConflict(PersistenceFailure):
    """Raised when the stored snapshot moved on since it was loaded."""

    def __init__(self, key: str, expected: int, found: int) -> None:
        super().__init__(f"Snapshot {key!r} is at version {found}, expected {expected}")
        self.key = key
        self.expected = expected
        self.found = found
