"""
Application error taxonomy.

Remote (record store) failures are converted into these at the component
boundary after local state has been restored; validation failures are raised
before any state is touched. None of them is fatal - every one is recoverable
by retrying the user action.
"""
from typing import Optional


class SceneSyncError(Exception):
    """Base class for all reported application errors."""
    pass


class SceneStoreError(SceneSyncError):
    """Base class for scene store failures."""

    def __init__(self, message: str, project_id: Optional[str] = None):
        self.project_id = project_id
        super().__init__(message)


class FetchError(SceneStoreError):
    """Loading scenes from the record store failed."""
    pass


class CreateError(SceneStoreError):
    """Creating a scene failed; nothing was inserted locally."""
    pass


class UpdateError(SceneStoreError):
    """Updating a scene failed; the previous record is kept."""
    pass


class DeleteError(SceneStoreError):
    """Deleting a scene failed; the scene is kept."""
    pass


class ReorderError(SceneStoreError):
    """Writing new scene positions failed, or the move was invalid."""
    pass


class AccessDeniedError(SceneSyncError):
    """The current identity does not own the requested project."""

    def __init__(self, project_id: str, user_id: Optional[str]):
        self.project_id = project_id
        self.user_id = user_id
        who = f"user '{user_id}'" if user_id else "anonymous session"
        super().__init__(f"Project '{project_id}' is not accessible to {who}")


class InvalidTimestampError(SceneSyncError):
    """Keyframe timestamp outside [0, duration] or duration not yet known."""

    def __init__(self, timestamp: float, duration: Optional[float]):
        self.timestamp = timestamp
        self.duration = duration
        if duration is None:
            message = f"Cannot place keyframe at {timestamp}s: audio duration is not known yet"
        else:
            message = f"Keyframe timestamp {timestamp}s is outside [0, {duration}]"
        super().__init__(message)


class PlaybackError(SceneSyncError):
    """The media capability rejected a transport request."""
    pass
