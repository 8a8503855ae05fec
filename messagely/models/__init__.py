"""SQLAlchemy models exposed for table creation and imports."""
from .message import Message
from .user import User

__all__ = ["User", "Message"]
