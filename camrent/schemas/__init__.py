from camrent.schemas.auth import Token, UserCreate, UserLogin, UserResponse
from camrent.schemas.region import DivisionResponse, RegionResponse
from camrent.schemas.property import PropertyCreate, PropertyDetail, PropertyFilters, PropertyResponse, PropertyUpdate
from camrent.schemas.inquiry import InquiryCreate, InquiryResponse
from camrent.schemas.review import RatingStats, ReviewCreate, ReviewResponse
from camrent.schemas.conversation import ConversationDetail, ConversationSummary, MessageCreate, MessageResponse
