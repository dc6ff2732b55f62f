# blog_api/models/post.py
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any

from blog_api.utils.datetime_utils import DateTimeUtils

@dataclass
class Post:
    """
    Document structure of the Firestore 'posts' collection.
    `thumbnail` is the blob name of the uploaded image, `creator` the owning user_id.
    """
    post_id: str
    title: str
    category: str
    description: str
    thumbnail: str
    creator: str
    created_at: datetime = field(default_factory=DateTimeUtils.now)
    updated_at: datetime = field(default_factory=DateTimeUtils.now)

class Ownership(Enum):
    AUTHORIZED = "AUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"

@dataclass
class OwnershipCheck:
    """Outcome of checking whether a caller may mutate a post. `post` is set unless NOT_FOUND."""
    outcome: Ownership
    post: Optional[Dict[str, Any]] = None

    @property
    def authorized(self) -> bool:
        return self.outcome is Ownership.AUTHORIZED
