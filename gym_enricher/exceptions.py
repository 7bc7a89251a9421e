"""Exception hierarchy for the enrichment pipeline."""


class GymEnricherError(Exception):
    """Base class for all errors raised by this package."""


class SchedulerNotInitializedError(GymEnricherError):
    """Raised when the control API is used before a scheduler exists."""

    def __init__(self, message: str = "Scheduler not initialized"):
        super().__init__(message)


class GymStoreError(GymEnricherError):
    """Raised when the gym store cannot be read or written."""


class GymNotFoundError(GymStoreError):
    """Raised when updating a gym id that does not exist."""

    def __init__(self, gym_id: int):
        self.gym_id = gym_id
        super().__init__(f"Gym {gym_id} not found")
