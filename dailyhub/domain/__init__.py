"""Domain layer - 外部依存なしのドメインモデルとインターフェース定義"""

from dailyhub.domain.errors import (
    AlreadyFriendsError,
    AlreadySyncedError,
    AuthMismatchError,
    CycleError,
    DailyHubError,
    DuplicateRequestError,
    InvalidTokenError,
    NotFoundError,
    NotSyncedError,
    StoreError,
    UnauthorizedError,
    ValidationError,
)
from dailyhub.domain.models import (
    ActionResult,
    CalendarEvent,
    Dashboard,
    EventColor,
    FinanceSummary,
    FriendsOverview,
    RequestContext,
    SecretItem,
    SecretItemType,
    Todo,
    Transaction,
    TransactionType,
    UserProfile,
    VerifiedIdentity,
)
from dailyhub.domain.ports import (
    ArrayRemove,
    ArrayUnion,
    DocumentStore,
    IdentityVerifier,
    WriteBatch,
)

__all__ = [
    # Models
    "ActionResult",
    "CalendarEvent",
    "Dashboard",
    "EventColor",
    "FinanceSummary",
    "FriendsOverview",
    "RequestContext",
    "SecretItem",
    "SecretItemType",
    "Todo",
    "Transaction",
    "TransactionType",
    "UserProfile",
    "VerifiedIdentity",
    # Errors
    "DailyHubError",
    "InvalidTokenError",
    "AuthMismatchError",
    "UnauthorizedError",
    "NotFoundError",
    "ValidationError",
    "CycleError",
    "AlreadySyncedError",
    "NotSyncedError",
    "AlreadyFriendsError",
    "DuplicateRequestError",
    "StoreError",
    # Ports
    "ArrayRemove",
    "ArrayUnion",
    "DocumentStore",
    "IdentityVerifier",
    "WriteBatch",
]
