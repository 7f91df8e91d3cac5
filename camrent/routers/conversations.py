"""Landlord/renter conversations over REST. New messages also nudge the other participant's open sockets."""
from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session

from camrent.database import get_db
from camrent.dependencies import RowId, get_current_user
from camrent.models.conversation import Conversation
from camrent.models.user import User
from camrent.schemas.conversation import (
    ConversationCreate,
    ConversationDetail,
    ConversationSummary,
    MessageCreate,
    MessageResponse,
    UnreadCount,
)
from camrent.services.messaging import (
    archive_conversation,
    get_conversation_for_user,
    get_messages,
    get_or_create_conversation,
    get_unread_message_count,
    list_conversations,
    mark_messages_as_read,
    send_message,
)
from camrent.services.relay import relay

router = APIRouter(prefix="/conversations", tags=["conversations"])
messages_router = APIRouter(prefix="/messages", tags=["conversations"])


def _summary(conversation: Conversation, unread_count: int = 0) -> ConversationSummary:
    summary = ConversationSummary.model_validate(conversation)
    summary.unread_count = unread_count
    return summary


def _detail(db: Session, conversation: Conversation) -> ConversationDetail:
    messages = [MessageResponse.model_validate(m) for m in get_messages(db, conversation.id)]
    return ConversationDetail(**dict(_summary(conversation)), messages=messages)


@router.get("", response_model=list[ConversationSummary])
def my_conversations(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return [_summary(c, unread) for c, unread in list_conversations(db, current_user.id)]


@router.post("", response_model=ConversationDetail)
def start_conversation(
    data: ConversationCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get or create the conversation with the property's landlord, optionally posting a first message."""
    conversation = get_or_create_conversation(db, data.property_id, current_user)
    if data.message and data.message.strip():
        send_message(db, conversation, current_user, data.message)
        background_tasks.add_task(relay.notify_new_message, conversation.id, conversation.landlord_id)
    conversation = get_conversation_for_user(db, conversation.id, current_user.id)
    return _detail(db, conversation)


@router.get("/{conversation_id}", response_model=ConversationDetail)
def conversation_detail(
    conversation_id: RowId,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    conversation = get_conversation_for_user(db, conversation_id, current_user.id)
    mark_messages_as_read(db, conversation.id, current_user.id)
    return _detail(db, conversation)


@router.post("/{conversation_id}/messages", response_model=MessageResponse, status_code=201)
def post_message(
    conversation_id: RowId,
    data: MessageCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    conversation = get_conversation_for_user(db, conversation_id, current_user.id)
    message = send_message(db, conversation, current_user, data.content, data.message_type)
    background_tasks.add_task(
        relay.notify_new_message, conversation.id, conversation.other_participant_id(current_user.id)
    )
    return message


@router.delete("/{conversation_id}")
def close_conversation(
    conversation_id: RowId,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    conversation = get_conversation_for_user(db, conversation_id, current_user.id)
    archive_conversation(db, conversation)
    return {"status": "archived", "id": conversation_id}


@messages_router.get("/unread-count", response_model=UnreadCount)
def unread_count(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return UnreadCount(count=get_unread_message_count(db, current_user.id))
