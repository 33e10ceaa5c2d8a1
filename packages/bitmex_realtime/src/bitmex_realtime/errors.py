"""Exception hierarchy for realtime sessions.

Terminal conditions of a session surface as exceptions raised from
``connect()``:

- SessionCancelled: the caller cancelled the context (expected stop)
- SessionFailure subclasses: connection, auth, subscribe or read failures

DecodeError is raised inside the decode path only and never escapes
FrameDecoder.decode().
"""


class RealtimeError(Exception):
    """Base class for all realtime client errors."""


class SessionCancelled(RealtimeError):
    """Session stopped because its context was cancelled."""


class SessionFailure(RealtimeError):
    """Session stopped because of an I/O or protocol failure."""


class ConnectionFailedError(SessionFailure):
    """Could not open the websocket connection."""


class AuthenticationError(SessionFailure):
    """Could not send the authentication request."""


class SubscribeError(SessionFailure):
    """Could not send a subscribe request."""


class StreamReadError(SessionFailure):
    """Reading from the connection failed or the read deadline expired."""


class DecodeError(RealtimeError):
    """A frame payload did not match the shape registered for its topic."""
