"""
Chat Session Service for VidhiSahayak.

This module provides services for managing AI chat sessions and messages.
"""

import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import desc, func

from vidhisahayak.models.user import User
from vidhisahayak.models.chat import ChatSession, ChatMessage
from vidhisahayak.schemas import (
    ChatSessionResponse, ChatMessageResponse, ChatSessionWithMessages,
    ChatSessionListResponse, ChatSessionUpdate
)
from vidhisahayak.services.prompt_builder import PromptMessage

logger = logging.getLogger(__name__)

TITLE_LENGTH = 80


def _message_response(msg: ChatMessage) -> ChatMessageResponse:
    return ChatMessageResponse(
        id=msg.id,
        session_id=msg.session_id,
        role=msg.role,
        content=msg.content,
        language=msg.language,
        provider=msg.provider,
        created_at=msg.created_at,
    )


def _session_response(session: ChatSession, message_count: int) -> ChatSessionResponse:
    return ChatSessionResponse(
        id=session.id,
        user_id=session.user_id,
        title=session.title,
        created_at=session.created_at,
        updated_at=session.updated_at,
        message_count=message_count or 0,
    )


class ChatSessionService:
    """Service for managing chat sessions and their messages."""

    def __init__(self, db: Session):
        self.db = db

    # Used by the chat pipeline; sessions may be anonymous

    def create_session(self, user: Optional[User] = None, title: Optional[str] = None) -> ChatSession:
        """Create a new chat session."""
        try:
            now = datetime.utcnow().isoformat()
            session = ChatSession(
                user_id=user.id if user else None,
                title=title[:TITLE_LENGTH] if title else None,
                created_at=now,
                updated_at=now,
            )
            self.db.add(session)
            self.db.commit()
            self.db.refresh(session)

            logger.info(f"Created chat session {session.id} for user {user.id if user else 'anonymous'}")
            return session

        except Exception as e:
            logger.error(f"Error creating chat session: {e}")
            self.db.rollback()
            raise

    def find_session(self, session_id: str) -> Optional[ChatSession]:
        """Look up a session by id regardless of owner."""
        return self.db.query(ChatSession).filter(ChatSession.id == session_id).first()

    def get_or_create_session(self, session_id: Optional[str], user: Optional[User], first_message: str) -> ChatSession:
        """
        Continue a session or start a new one.

        Unknown ids and sessions owned by another user start a new session.
        An anonymous session is claimed by the first signed-in user to use it.
        """
        session = self.find_session(session_id) if session_id else None
        if session is not None:
            if session.user_id is None and user is not None:
                session.user_id = user.id
                self.db.commit()
                return session
            if session.user_id is None or (user is not None and session.user_id == user.id):
                return session
            logger.warning(f"Session {session_id} belongs to another user, starting a new one")
        elif session_id:
            logger.info(f"Session {session_id} not found, starting a new one")

        return self.create_session(user, title=first_message)

    def append_message(
        self,
        session_id: str,
        role: str,
        content: str,
        language: Optional[str] = None,
        provider: Optional[str] = None,
    ) -> ChatMessage:
        """Append a message to a session."""
        try:
            message = ChatMessage(
                session_id=session_id,
                role=role,
                content=content,
                language=language,
                provider=provider,
                created_at=datetime.utcnow().isoformat(),
            )
            self.db.add(message)

            # Update session timestamp
            self.db.query(ChatSession).filter(ChatSession.id == session_id).update(
                {"updated_at": datetime.utcnow().isoformat()}
            )

            self.db.commit()
            self.db.refresh(message)
            return message

        except Exception as e:
            logger.error(f"Error adding message to session {session_id}: {e}")
            self.db.rollback()
            raise

    def recent_messages(self, session_id: str, limit: int) -> List[PromptMessage]:
        """The last `limit` messages of a session, oldest first."""
        rows = self.db.query(ChatMessage).filter(
            ChatMessage.session_id == session_id
        ).order_by(ChatMessage.id.desc()).limit(limit).all()

        return [PromptMessage(row.role, row.content) for row in reversed(rows)]

    # Owner-facing history management

    def _owned_session(self, session_id: str, user: User) -> Optional[ChatSession]:
        return self.db.query(ChatSession).filter(
            ChatSession.id == session_id,
            ChatSession.user_id == user.id
        ).first()

    def _message_count(self, session_id: str) -> int:
        return self.db.query(func.count(ChatMessage.id)).filter(
            ChatMessage.session_id == session_id
        ).scalar() or 0

    def list_sessions(self, user: User, page: int = 1, per_page: int = 20) -> ChatSessionListResponse:
        try:
            # Calculate offset
            offset = (page - 1) * per_page

            # Get total count
            total = self.db.query(func.count(ChatSession.id)).filter(
                ChatSession.user_id == user.id
            ).scalar()

            # Get sessions with message counts
            sessions = self.db.query(
                ChatSession,
                func.count(ChatMessage.id).label('message_count')
            ).outerjoin(
                ChatMessage, ChatSession.id == ChatMessage.session_id
            ).filter(
                ChatSession.user_id == user.id
            ).group_by(ChatSession.id).order_by(
                desc(ChatSession.updated_at)
            ).offset(offset).limit(per_page).all()

            return ChatSessionListResponse(
                sessions=[_session_response(session, count) for session, count in sessions],
                total=total or 0,
                page=page,
                per_page=per_page
            )

        except Exception as e:
            logger.error(f"Error listing chat sessions for user {user.id}: {e}")
            raise

    def get_session_with_messages(self, session_id: str, user: User) -> Optional[ChatSessionWithMessages]:
        session = self._owned_session(session_id, user)
        if not session:
            return None

        messages = self.db.query(ChatMessage).filter(
            ChatMessage.session_id == session.id
        ).order_by(ChatMessage.id.asc()).all()

        base = _session_response(session, len(messages))
        return ChatSessionWithMessages(
            **base.model_dump(),
            messages=[_message_response(m) for m in messages],
        )

    def update_session(self, session_id: str, user: User, update_data: ChatSessionUpdate) -> Optional[ChatSessionResponse]:
        """Rename a chat session."""
        try:
            session = self._owned_session(session_id, user)
            if not session:
                return None

            session.title = update_data.title
            session.updated_at = datetime.utcnow().isoformat()

            self.db.commit()
            self.db.refresh(session)

            logger.info(f"Updated chat session {session_id} for user {user.id}")
            return _session_response(session, self._message_count(session.id))

        except Exception as e:
            logger.error(f"Error updating chat session {session_id}: {e}")
            self.db.rollback()
            raise

    def delete_session(self, session_id: str, user: User) -> bool:
        """Delete a chat session and its messages."""
        try:
            session = self._owned_session(session_id, user)
            if not session:
                return False

            self.db.delete(session)
            self.db.commit()

            logger.info(f"Deleted chat session {session_id} for user {user.id}")
            return True

        except Exception as e:
            logger.error(f"Error deleting chat session {session_id}: {e}")
            self.db.rollback()
            raise

    def get_chat_history(self, session_id: str, user: User) -> str:
        """Get formatted chat history for a session."""
        session = self._owned_session(session_id, user)
        if not session:
            return ""

        lines = []
        for msg in session.messages:
            speaker = "You" if msg.role == "user" else "VidhiSahayak"
            lines.append(f"{speaker}: {msg.content}")
        return "\n".join(lines)
