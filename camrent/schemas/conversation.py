"""Conversation and message schemas."""
from datetime import datetime
from pydantic import BaseModel, Field
from camrent.database import MAX_ID
from camrent.models.conversation import MessageType
from camrent.schemas.review import ReviewerSummary


class ConversationCreate(BaseModel):
    property_id: int = Field(le=MAX_ID)
    message: str | None = None


class MessageCreate(BaseModel):
    content: str = Field(min_length=1)
    message_type: MessageType = MessageType.text


class MessageResponse(BaseModel):
    id: int
    conversation_id: int
    sender_id: int
    content: str
    message_type: MessageType
    is_read: bool
    read_at: datetime | None = None
    created_at: datetime | None = None
    sender: ReviewerSummary | None = None

    class Config:
        from_attributes = True


class ConversationPropertySummary(BaseModel):
    id: int
    title: str
    region_id: int
    division_id: int
    images: list[str] = []

    class Config:
        from_attributes = True


class ConversationResponse(BaseModel):
    id: int
    property_id: int
    landlord_id: int
    renter_id: int
    is_active: bool
    last_message_at: datetime | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class ConversationSummary(ConversationResponse):
    property: ConversationPropertySummary
    landlord: ReviewerSummary
    renter: ReviewerSummary
    unread_count: int = 0


class ConversationDetail(ConversationSummary):
    messages: list[MessageResponse] = []


class UnreadCount(BaseModel):
    count: int
