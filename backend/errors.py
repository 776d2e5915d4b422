"""
Error taxonomy for the event recorder.

InvalidArgument: a required field was missing/empty, or the event could not
                 be encoded. Never retried.
IOFailure:       the log file could not be created, opened or fully written.
                 The durable state is left as it was before the call.
"""


class RecorderError(Exception):
    """Base class for every failure the recorder reports to its callers."""


class InvalidArgument(RecorderError, ValueError):
    pass


class IOFailure(RecorderError, OSError):
    pass


class FrameDecodeError(RecorderError):
    """A scanned frame payload is not a JSON object."""
