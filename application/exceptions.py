"""
Application-layer exceptions.

These exceptions are used across application and infrastructure layers.
Step validation failures are deliberately absent: an incomplete step is
reported as a notice, never raised.
"""


class ArtifactLoadError(Exception):
    """Loading an artifact for editing failed.

    Fatal to opening the wizard: callers must not start a session from a
    half-populated state.
    """

    def __init__(self, message: str, artifact_id: str = ""):
        super().__init__(message)
        self.message = message
        self.artifact_id = artifact_id


class ArtifactNotFoundError(ArtifactLoadError):
    """The id matches no workout and no training plan."""


class ArtifactSaveError(Exception):
    """The backing store rejected or failed a primary save.

    Raised by repositories; SaveArtifactUseCase turns it into a failed
    result so the wizard stays open with its state intact.
    """


class SaveInProgressError(Exception):
    """A save is already running for this wizard session."""


class SaveNotAllowedError(Exception):
    """The wizard is not ready to save, or its session was already saved."""
