# coding=utf-8
import queue


class NotificationChannel(object):
    """
    Where the tailer publishes its notifications
    """

    def publish(self, notification):
        raise NotImplementedError('publish')


class CallbackChannel(NotificationChannel):
    """
    Hands every notification to a callable, in publishing order
    """

    def __init__(self, callback):
        self.callback = callback

    def publish(self, notification):
        self.callback(notification)


class QueueChannel(NotificationChannel):
    """
    Buffers notifications in a queue.Queue for a consumer to drain
    """

    def __init__(self, maxsize=0):
        self.queue = queue.Queue(maxsize)

    def publish(self, notification):
        self.queue.put(notification)

    def get(self, block=False, timeout=None):
        """
        Return the next notification, or None if there is none
        """
        try:
            return self.queue.get(block, timeout)
        except queue.Empty:
            return None

    def empty(self):
        return self.queue.empty()
