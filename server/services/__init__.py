"""Services package"""

from .activity import get_activity
from .revalidation import register_revalidator, revalidate_path
from .user_profile import fetch_user, update_user
from .user_search import fetch_users
from .user_threads import fetch_user_posts

__all__ = [
    "update_user",
    "fetch_user",
    "fetch_users",
    "fetch_user_posts",
    "get_activity",
    "register_revalidator",
    "revalidate_path",
]
