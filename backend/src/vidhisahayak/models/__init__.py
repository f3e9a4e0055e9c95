"""
Database models.
"""

# Import all models to ensure they are registered with SQLAlchemy
from .base import Base
from .user import User
from .chat import ChatSession, ChatMessage
from .lawyer import LawyerProfile

__all__ = ["Base", "User", "ChatSession", "ChatMessage", "LawyerProfile"]
