from alumni.schemas.base import CamelModel
from alumni.schemas.auth import (
    UserSignup,
    UserLogin,
    LoginUser,
    LoginResponse,
    MessageResponse,
    Identity,
)
from alumni.schemas.user import (
    UserRef,
    UserResponse,
    DirectoryUserResponse,
    UserApprovalUpdate,
)
from alumni.schemas.community import (
    EventCreate,
    EventResponse,
    NewsCreate,
    NewsResponse,
    ForumThreadCreate,
    ForumReplyCreate,
    ForumReplyResponse,
    ForumThreadResponse,
    GalleryResponse,
    BoardMinuteResponse,
)
from alumni.schemas.donation import (
    CreatePaymentRequest,
    CreatePaymentResponse,
    VerifyPaymentResponse,
    DonationResponse,
)

__all__ = [
    "CamelModel",
    "UserSignup",
    "UserLogin",
    "LoginUser",
    "LoginResponse",
    "MessageResponse",
    "Identity",
    "UserRef",
    "UserResponse",
    "DirectoryUserResponse",
    "UserApprovalUpdate",
    "EventCreate",
    "EventResponse",
    "NewsCreate",
    "NewsResponse",
    "ForumThreadCreate",
    "ForumReplyCreate",
    "ForumReplyResponse",
    "ForumThreadResponse",
    "GalleryResponse",
    "BoardMinuteResponse",
    "CreatePaymentRequest",
    "CreatePaymentResponse",
    "VerifyPaymentResponse",
    "DonationResponse",
]
