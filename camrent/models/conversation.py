"""Chat between one landlord and one renter about one property."""
from sqlalchemy import Column, Integer, Text, Boolean, ForeignKey, Enum as SQLEnum, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from camrent.database import Base
import enum


class MessageType(str, enum.Enum):
    text = "text"
    image = "image"
    system = "system"


class Conversation(Base):
    __tablename__ = "conversations"
    __table_args__ = (
        UniqueConstraint("property_id", "landlord_id", "renter_id", name="uq_conversations_property_participants"),
    )

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id"), nullable=False, index=True)
    landlord_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    renter_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    is_active = Column(Boolean, nullable=False, default=True)
    last_message_at = Column(DateTime(timezone=True), server_default=func.now())
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    property = relationship("Property", back_populates="conversations")
    landlord = relationship("User", foreign_keys=[landlord_id])
    renter = relationship("User", foreign_keys=[renter_id])
    messages = relationship("Message", back_populates="conversation", cascade="all, delete-orphan")

    def other_participant_id(self, user_id: int) -> int:
        return self.renter_id if user_id == self.landlord_id else self.landlord_id


class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, index=True)
    conversation_id = Column(Integer, ForeignKey("conversations.id"), nullable=False, index=True)
    sender_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    content = Column(Text, nullable=False)
    message_type = Column(SQLEnum(MessageType), nullable=False, default=MessageType.text)

    # Only these two change after creation
    is_read = Column(Boolean, nullable=False, default=False)
    read_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    conversation = relationship("Conversation", back_populates="messages")
    sender = relationship("User")
