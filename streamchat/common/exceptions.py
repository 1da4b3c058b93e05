"""
Custom exceptions for StreamChat.
"""


class StreamChatException(Exception):
    """Base exception for StreamChat errors."""
    pass


class TransportError(StreamChatException):
    """Reading from or writing to the connection failed."""
    pass


class ConnectionClosedError(TransportError):
    """Peer closed the connection before the expected bytes arrived."""
    pass


class HandshakeError(StreamChatException):
    """Key exchange could not be completed."""
    pass


class ConnectionSetupError(StreamChatException):
    """Binding, accepting or connecting failed."""
    pass
