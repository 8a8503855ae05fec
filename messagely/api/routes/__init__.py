"""Route modules for the Messagely API."""
from . import auth, messages, users

__all__ = ["auth", "users", "messages"]
