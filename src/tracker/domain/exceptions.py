class TaskNotFoundError(Exception):
    """Raised when an update targets a task identifier that is not stored."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task with id '{task_id}' was not found.")
        self.task_id = task_id


class InvalidSortAttributeError(ValueError):
    """Raised when a sort order names an attribute that cannot be ordered by."""

    def __init__(self, attribute: str, allowed: tuple[str, ...]) -> None:
        super().__init__(
            f"Cannot sort tasks by '{attribute}'. Allowed: {', '.join(allowed)}."
        )
        self.attribute = attribute
        self.allowed = allowed
