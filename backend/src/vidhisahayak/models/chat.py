"""
AI chat session and message models for VidhiSahayak.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship

from vidhisahayak.models.base import Base


def _new_session_id() -> str:
    return str(uuid.uuid4())


class ChatSession(Base):
    """
    A conversation with the assistant. Anonymous visitors get sessions without
    an owner; signed-in users own theirs.
    """
    __tablename__ = "ai_chat_sessions"

    id = Column(String(36), primary_key=True, default=_new_session_id)
    user_id = Column(Integer, ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True, index=True)
    title = Column(String(255), nullable=True)
    created_at = Column(String, nullable=True, default=lambda: datetime.utcnow().isoformat())
    updated_at = Column(String, nullable=True, default=lambda: datetime.utcnow().isoformat())

    # Relationships
    user = relationship("User", back_populates="chat_sessions")
    messages = relationship(
        "ChatMessage",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="ChatMessage.id",
    )

    def __repr__(self):
        return f"<ChatSession(id={self.id}, user_id={self.user_id}, title='{self.title}')>"


class ChatMessage(Base):
    """A single user or assistant turn in a chat session."""
    __tablename__ = "ai_chat_messages"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(String(36), ForeignKey("ai_chat_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(String(20), nullable=False)  # 'user' or 'assistant'
    content = Column(Text, nullable=False)
    language = Column(String(10), nullable=True)
    provider = Column(String(20), nullable=True)
    created_at = Column(String, nullable=True, default=lambda: datetime.utcnow().isoformat())

    # Relationships
    session = relationship("ChatSession", back_populates="messages")

    def __repr__(self):
        return f"<ChatMessage(id={self.id}, session_id={self.session_id}, role='{self.role}')>"
