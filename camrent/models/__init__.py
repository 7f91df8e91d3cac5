"""
All SQLAlchemy models. Schema is the source of truth for new DBs.
Base.metadata.create_all() creates every table; no migration scripts needed for fresh installs.
"""
from camrent.models.user import User
from camrent.models.region import Region, Division
from camrent.models.property import Property
from camrent.models.inquiry import Inquiry
from camrent.models.review import Review
from camrent.models.conversation import Conversation, Message
from camrent.models.favorite import Favorite

__all__ = [
    "User",
    "Region",
    "Division",
    "Property",
    "Inquiry",
    "Review",
    "Conversation",
    "Message",
    "Favorite",
]
