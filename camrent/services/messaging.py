"""Conversations and messages. Shared by the REST routes and the WebSocket relay so both
persist messages through the same path."""
from __future__ import annotations

from datetime import datetime, timezone

from fastapi import HTTPException
from sqlalchemy import or_, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from camrent.models.conversation import Conversation, Message, MessageType
from camrent.models.property import Property
from camrent.models.user import User


def _participant_filter(user_id: int):
    return or_(Conversation.landlord_id == user_id, Conversation.renter_id == user_id)


def get_or_create_conversation(db: Session, property_id: int, renter: User) -> Conversation:
    """One conversation per (property, landlord, renter). A concurrent create that loses
    the race on the unique constraint falls back to the row that won."""
    prop = db.query(Property).filter(Property.id == property_id).first()
    if not prop:
        raise HTTPException(status_code=404, detail="Property not found")
    if prop.landlord_id == renter.id:
        raise HTTPException(status_code=400, detail="You cannot start a conversation about your own property")

    def _existing() -> Conversation | None:
        return (
            db.query(Conversation)
            .filter(
                Conversation.property_id == prop.id,
                Conversation.landlord_id == prop.landlord_id,
                Conversation.renter_id == renter.id,
            )
            .first()
        )

    conversation = _existing()
    if conversation:
        if not conversation.is_active:
            conversation.is_active = True
            db.commit()
        return conversation
    conversation = Conversation(property_id=prop.id, landlord_id=prop.landlord_id, renter_id=renter.id)
    db.add(conversation)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        conversation = _existing()
        if conversation is None:
            raise
    db.refresh(conversation)
    return conversation


def get_conversation_for_user(db: Session, conversation_id: int, user_id: int) -> Conversation:
    """404 unless the user is the conversation's landlord or renter."""
    conversation = (
        db.query(Conversation)
        .options(
            joinedload(Conversation.property),
            joinedload(Conversation.landlord),
            joinedload(Conversation.renter),
        )
        .filter(Conversation.id == conversation_id, _participant_filter(user_id))
        .first()
    )
    if not conversation:
        raise HTTPException(status_code=404, detail="Conversation not found")
    return conversation


def _unread_query(db: Session, user_id: int):
    return db.query(Message).filter(Message.is_read.is_(False), Message.sender_id != user_id)


def list_conversations(db: Session, user_id: int) -> list[tuple[Conversation, int]]:
    """Active conversations of a user, most recently active first, each with its unread count."""
    conversations = (
        db.query(Conversation)
        .options(
            joinedload(Conversation.property),
            joinedload(Conversation.landlord),
            joinedload(Conversation.renter),
        )
        .filter(Conversation.is_active.is_(True), _participant_filter(user_id))
        .order_by(Conversation.last_message_at.desc(), Conversation.id.desc())
        .all()
    )
    if not conversations:
        return []
    counts = dict(
        _unread_query(db, user_id)
        .with_entities(Message.conversation_id, func.count(Message.id))
        .filter(Message.conversation_id.in_([c.id for c in conversations]))
        .group_by(Message.conversation_id)
        .all()
    )
    return [(c, int(counts.get(c.id, 0))) for c in conversations]


def get_messages(db: Session, conversation_id: int) -> list[Message]:
    """Newest first."""
    return (
        db.query(Message)
        .options(joinedload(Message.sender))
        .filter(Message.conversation_id == conversation_id)
        .order_by(Message.created_at.desc(), Message.id.desc())
        .all()
    )


def send_message(
    db: Session,
    conversation: Conversation,
    sender: User,
    content: str,
    message_type: MessageType = MessageType.text,
) -> Message:
    if sender.id not in (conversation.landlord_id, conversation.renter_id):
        raise HTTPException(status_code=404, detail="Conversation not found")
    content = (content or "").strip()
    if not content:
        raise HTTPException(status_code=400, detail="Message content is required")
    now = datetime.now(timezone.utc)
    message = Message(
        conversation_id=conversation.id,
        sender_id=sender.id,
        content=content,
        message_type=message_type,
        created_at=now,
    )
    db.add(message)
    conversation.last_message_at = now
    conversation.is_active = True
    db.commit()
    db.refresh(message)
    return message


def mark_messages_as_read(db: Session, conversation_id: int, user_id: int) -> int:
    """Mark the other participant's unread messages read; returns how many changed."""
    updated = (
        _unread_query(db, user_id)
        .filter(Message.conversation_id == conversation_id)
        .update({Message.is_read: True, Message.read_at: datetime.now(timezone.utc)}, synchronize_session=False)
    )
    db.commit()
    return int(updated or 0)


def get_unread_message_count(db: Session, user_id: int) -> int:
    active_ids = (
        db.query(Conversation.id)
        .filter(Conversation.is_active.is_(True), _participant_filter(user_id))
    )
    return int(
        _unread_query(db, user_id)
        .filter(Message.conversation_id.in_(active_ids.scalar_subquery()))
        .count()
    )


def archive_conversation(db: Session, conversation: Conversation) -> None:
    """Close a conversation for both participants. Sending a new message reopens it."""
    conversation.is_active = False
    db.commit()
