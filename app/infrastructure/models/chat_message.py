"""SQLAlchemy model for persisted chat messages."""

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, Text

from app.infrastructure.database import Base
from app.utils import new_identifier, now_in_app_naive_datetime


class ChatMessageModel(Base):
    """Database representation of a direct message.

    Sender and recipient may live in any of the account tables, so they are
    stored as plain identifiers rather than foreign keys.
    """

    __tablename__ = "chat_message"
    __table_args__ = (
        Index("ix_chat_message_pair_created", "sender_id", "recipient_id", "created_at"),
        Index("ix_chat_message_recipient_read", "recipient_id", "read_at"),
    )

    id = Column(String(32), primary_key=True, default=new_identifier)
    sender_id = Column(String(32), nullable=False)
    recipient_id = Column(String(32), nullable=False)
    body = Column(Text, nullable=False)
    kind = Column(String(20), nullable=False, default="text")
    attachment_url = Column(String(500), nullable=True)
    attachment_filename = Column(String(255), nullable=True)
    attachment_type = Column(String(100), nullable=True)
    attachment_size = Column(Integer, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    read_at = Column(DateTime, nullable=True)
    is_deleted = Column(Boolean, nullable=False, default=False)
    deleted_at = Column(DateTime, nullable=True)


__all__ = ["ChatMessageModel"]
