class MessagingError(Exception):
    """Base exception for broker transport errors."""


class MessageDeserializationError(MessagingError):
    """Raised when a message body cannot be decoded into an UploadEvent."""
