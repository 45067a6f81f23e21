class ClaudeBurstError(Exception):
    """
    base class for errors raised outside the pure core.
    """


class NotificationError(ClaudeBurstError):
    """
    raised when a notifier fails to deliver a message.
    """
