
from .idea import Idea, Interest
from .notification import Notification

__all__ = ["Idea", "Interest", "Notification"]
