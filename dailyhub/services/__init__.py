"""Services layer - ビジネスロジック"""

from dailyhub.services.dashboard import DashboardService
from dailyhub.services.events import EventService
from dailyhub.services.finance import FinanceService
from dailyhub.services.friends import FriendshipService
from dailyhub.services.guard import AuthorizationGuard
from dailyhub.services.secret_items import SecretItemService
from dailyhub.services.secret_tree import SecretTree
from dailyhub.services.todo_event_link import TodoEventLinker
from dailyhub.services.todos import TodoService

__all__ = [
    "AuthorizationGuard",
    "DashboardService",
    "EventService",
    "FinanceService",
    "FriendshipService",
    "SecretItemService",
    "SecretTree",
    "TodoEventLinker",
    "TodoService",
]
