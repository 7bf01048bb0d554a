"""Errors raised by the draft network pipeline."""


class DraftNetworkError(Exception):
    """Base class for draft network errors."""


class AcquisitionError(DraftNetworkError):
    """The statistics provider failed to return data."""


class EmptyGraphError(DraftNetworkError, ValueError):
    """No team-season had two or more draft-class players, so there are no edges."""
