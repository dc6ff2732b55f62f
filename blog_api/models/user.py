# blog_api/models/user.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Dict, Any

from blog_api.utils.datetime_utils import DateTimeUtils

@dataclass
class User:
    """
    Document structure of the Firestore 'users' collection.
    `posts` counts the posts this user authored; PostService keeps it current.
    """
    user_id: str
    name: str
    email: str
    password: str  # bcrypt hash, never returned to clients
    avatar: Optional[str] = None
    posts: int = 0
    created_at: datetime = field(default_factory=DateTimeUtils.now)

def to_public(user_data: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of a user document without the password hash."""
    return {key: value for key, value in user_data.items() if key != 'password'}
