# blog_api/api/posts/services.py
import logging
import uuid
from dataclasses import asdict
from typing import Optional, Dict, Any, List, Callable, TypeVar

from blog_api.core.errors import (
    InvalidInputError,
    NotFoundError,
    ForbiddenError,
    PayloadTooLargeError,
    UpdateFailedError,
    InternalError,
)
from blog_api.models.attachment import Attachment
from blog_api.models.post import Post, Ownership, OwnershipCheck
from blog_api.services.storage_service import StorageService, generate_blob_name
from blog_api.utils.datetime_utils import DateTimeUtils

MAX_THUMBNAIL_BYTES = 2_000_000
MIN_DESCRIPTION_LENGTH = 12

T = TypeVar('T')

class PostService:
    """
    Business logic for posts.
    Thumbnails live in the blob store; each user's `posts` counter follows creates and deletes.
    """
    def __init__(self, posts, users, storage_service: StorageService):
        """
        :param posts: document store for the 'posts' collection
        :param users: document store for the 'users' collection
        :param storage_service: blob store holding the thumbnails
        """
        self.posts = posts
        self.users = users
        self.storage_service = storage_service

    # --- Upload handling: decide first, apply afterwards ---
    def _prepare_upload(self, attachment: Attachment) -> str:
        """Validate a thumbnail and pick the blob name it will be stored under. Touches nothing."""
        if attachment.size > MAX_THUMBNAIL_BYTES:
            raise PayloadTooLargeError("Thumbnail is too big. File should be less than 2mb.")
        return generate_blob_name(attachment.filename)

    # --- Counter maintenance ---
    def _adjust_post_count(self, user_id: str, delta: int) -> None:
        """Read-then-write update of a user's post counter. Never drops below zero."""
        user = self.users.find_by_id(user_id)
        if not user:
            logging.warning(f"Post counter not updated, user missing (user_id: {user_id})")
            return
        new_count = max(0, user.get('posts', 0) + delta)
        self.users.update_by_id(user_id, {'posts': new_count})

    def _mutate_and_count(self, mutation: Callable[[], T], user_id: str, delta: int) -> T:
        """
        Run a post mutation, then move the owner's counter by delta.
        Not atomic: if the counter update fails, the mutation stays applied and the counter drifts.
        """
        result = mutation()
        try:
            self._adjust_post_count(user_id, delta)
        except Exception as e:
            logging.error(f"Post counter update failed after mutation (user_id: {user_id}, delta: {delta}): {e}", exc_info=True)
            raise
        return result

    # --- Ownership ---
    def check_ownership(self, post_id: str, caller_id: str) -> OwnershipCheck:
        """Decide whether caller_id may edit or delete the post. Never mutates anything."""
        post = self.posts.find_by_id(post_id)
        if not post:
            return OwnershipCheck(Ownership.NOT_FOUND)
        if post.get('creator') != caller_id:
            return OwnershipCheck(Ownership.FORBIDDEN, post)
        return OwnershipCheck(Ownership.AUTHORIZED, post)

    def _require_owner(self, post_id: str, caller_id: str) -> Dict[str, Any]:
        check = self.check_ownership(post_id, caller_id)
        if check.outcome is Ownership.NOT_FOUND:
            raise NotFoundError("Post not found.")
        if check.outcome is Ownership.FORBIDDEN:
            logging.warning(f"Ownership check failed (post_id: {post_id}, caller_id: {caller_id})")
            raise ForbiddenError("Only the author can modify this post.")
        return check.post

    # --- Commands ---
    def create_post(self, title: str, category: str, description: str,
                    thumbnail: Optional[Attachment], caller_id: str) -> Dict[str, Any]:
        """Create a post owned by caller_id and bump the caller's post counter."""
        if not title or not category or not description or not thumbnail:
            raise InvalidInputError("Fill in all fields and choose a thumbnail.")
        blob_name = self._prepare_upload(thumbnail)

        self.storage_service.save(blob_name, thumbnail.data)

        post_id = str(uuid.uuid4())
        new_post = Post(
            post_id=post_id, title=title, category=category,
            description=description, thumbnail=blob_name, creator=caller_id
        )

        def _create_record():
            try:
                return self.posts.create(post_id, asdict(new_post))
            except InternalError:
                # No record points at the new thumbnail, so drop it.
                self.storage_service.discard(blob_name)
                raise

        created = self._mutate_and_count(_create_record, caller_id, +1)
        logging.info(f"Post created (post_id: {post_id}, creator: {caller_id})")
        return created

    def update_post(self, post_id: str, title: str, category: str, description: str,
                    thumbnail: Optional[Attachment], caller_id: str) -> Dict[str, Any]:
        """Replace a post's text fields and, when a new thumbnail is given, its image."""
        if not title or not category or len(description or "") < MIN_DESCRIPTION_LENGTH:
            raise InvalidInputError(
                f"Fill in all fields. Description needs at least {MIN_DESCRIPTION_LENGTH} characters."
            )
        old_post = self._require_owner(post_id, caller_id)

        update_data = {
            'title': title,
            'category': category,
            'description': description,
            'updated_at': DateTimeUtils.now(),
        }
        if thumbnail:
            blob_name = self._prepare_upload(thumbnail)
            self.storage_service.discard(old_post['thumbnail'])
            self.storage_service.save(blob_name, thumbnail.data)
            update_data['thumbnail'] = blob_name

        updated_post = self.posts.update_by_id(post_id, update_data)
        if not updated_post:
            raise UpdateFailedError("Could not update post.")
        return updated_post

    def delete_post(self, post_id: str, caller_id: str) -> str:
        """Delete a post with its thumbnail and decrement the owner's post counter."""
        post = self._require_owner(post_id, caller_id)

        # The record is only removed once its thumbnail is gone (or was already missing).
        self.storage_service.discard(post['thumbnail'])

        def _delete_record():
            # Another request removed it first; that request owns the decrement.
            if not self.posts.delete_by_id(post_id):
                raise NotFoundError("Post not found.")
            return True

        self._mutate_and_count(_delete_record, post['creator'], -1)
        logging.info(f"Post deleted (post_id: {post_id}, creator: {caller_id})")
        return f"Post {post_id} is deleted."

    # --- Queries ---
    def get_posts(self) -> List[Dict[str, Any]]:
        """All posts, most recently updated first."""
        return self.posts.find(order_by='updated_at', descending=True)

    def get_post_by_id(self, post_id: str) -> Dict[str, Any]:
        post = self.posts.find_by_id(post_id)
        if not post:
            raise NotFoundError("Post not found.")
        return post

    def get_posts_by_category(self, category: str) -> List[Dict[str, Any]]:
        return self.posts.find({'category': category}, order_by='created_at', descending=True)

    def get_posts_by_creator(self, creator_id: str) -> List[Dict[str, Any]]:
        """Posts written by one user, newest first."""
        return self.posts.find({'creator': creator_id}, order_by='created_at', descending=True)
