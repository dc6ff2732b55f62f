# blog_api/api/users/services.py
import logging
import uuid
from dataclasses import asdict
from typing import Optional, Dict, Any, List, Callable

from blog_api.core.errors import (
    InvalidInputError,
    DuplicateEmailError,
    WeakPasswordError,
    PasswordMismatchError,
    InvalidCredentialsError,
    NotFoundError,
    PayloadTooLargeError,
    UpdateFailedError,
)
from blog_api.core.security import hash_password, verify_password, issue_access_token
from blog_api.models.attachment import Attachment
from blog_api.models.user import User, to_public
from blog_api.services.storage_service import StorageService, generate_blob_name

MIN_PASSWORD_LENGTH = 6
MAX_AVATAR_BYTES = 500_000

class UserService:
    """
    Business logic for accounts: registration, login, profiles and avatars.
    - Talks to the 'users' collection directly.
    - The blob store and the token issuer are injected.
    """
    def __init__(self, users, storage_service: StorageService,
                 token_issuer: Callable[[str, str], str] = issue_access_token):
        """
        :param users: document store for the 'users' collection
        :param storage_service: blob store holding the avatars
        :param token_issuer: builds the access token returned by login
        """
        self.users = users
        self.storage_service = storage_service
        self.token_issuer = token_issuer

    def _find_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        matches = self.users.find({'email': email.lower()})
        return matches[0] if matches else None

    def register(self, name: str, email: str, password: str, password2: Optional[str]) -> Dict[str, Any]:
        """
        Create an account. Returns a welcome message and the new user_id, never a token.
        """
        if not name or not email or not password:
            raise InvalidInputError("Fill in all fields.")

        normalized_email = email.lower()
        if self._find_by_email(normalized_email):
            raise DuplicateEmailError("Email already exists.")
        if len(password.strip()) < MIN_PASSWORD_LENGTH:
            raise WeakPasswordError(f"Password should be at least {MIN_PASSWORD_LENGTH} characters.")
        if password != password2:
            raise PasswordMismatchError("Passwords do not match.")

        user_id = str(uuid.uuid4())
        new_user = User(
            user_id=user_id,
            name=name,
            email=normalized_email,
            password=hash_password(password),
        )
        self.users.create(user_id, asdict(new_user))
        logging.info(f"User registered (user_id: {user_id})")
        return {"message": f"Registration is done, welcome {name}!", "user_id": user_id}

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """Check credentials and issue an access token. Both failure cases share one message."""
        if not email or not password:
            raise InvalidInputError("Please fill in all fields.")

        user = self._find_by_email(email)
        if not user or not verify_password(password, user.get('password')):
            raise InvalidCredentialsError("Invalid credentials.")

        token = self.token_issuer(user['user_id'], user['name'])
        return {"token": token, "id": user['user_id'], "name": user['name']}

    def get_user_profile(self, user_id: str) -> Dict[str, Any]:
        user = self.users.find_by_id(user_id)
        if not user:
            raise NotFoundError("User not found.")
        return to_public(user)

    def get_authors(self) -> List[Dict[str, Any]]:
        """Every registered user, without password hashes."""
        return [to_public(user) for user in self.users.find()]

    def change_avatar(self, caller_id: str, avatar: Optional[Attachment]) -> Dict[str, Any]:
        """
        Replace the caller's avatar.
        :param caller_id: authenticated user
        :param avatar: uploaded image, at most 500,000 bytes
        :return: the updated user without the password hash
        """
        if not avatar:
            raise InvalidInputError("Please choose an image.")
        if avatar.size > MAX_AVATAR_BYTES:
            raise PayloadTooLargeError("Profile image is too big. It should be less than 500kb.")
        blob_name = generate_blob_name(avatar.filename)

        user = self.users.find_by_id(caller_id)
        if not user:
            raise NotFoundError("User not found.")

        if user.get('avatar'):
            self.storage_service.discard(user['avatar'])
        self.storage_service.save(blob_name, avatar.data)

        updated_user = self.users.update_by_id(caller_id, {'avatar': blob_name})
        if not updated_user:
            # No record points at the new avatar, so drop it.
            self.storage_service.discard(blob_name)
            raise UpdateFailedError("Avatar couldn't be changed.")
        logging.info(f"Avatar changed (user_id: {caller_id}, blob: {blob_name})")
        return to_public(updated_user)

    def edit_user(self, caller_id: str, name: str, email: str, current_password: str,
                  new_password: str, confirm_new_password: Optional[str]) -> Dict[str, Any]:
        """Update the caller's name, email and password after re-checking the current password."""
        if not name or not email or not current_password or not new_password:
            raise InvalidInputError("Fill in all fields.")

        user = self.users.find_by_id(caller_id)
        if not user:
            raise NotFoundError("User not found.")

        normalized_email = email.lower()
        owner = self._find_by_email(normalized_email)
        if owner and owner['user_id'] != caller_id:
            raise DuplicateEmailError("Email already exists.")

        if not verify_password(current_password, user.get('password')):
            raise InvalidCredentialsError("Invalid current password.")
        if new_password != confirm_new_password:
            raise PasswordMismatchError("New passwords do not match.")

        updated_user = self.users.update_by_id(caller_id, {
            'name': name,
            'email': normalized_email,
            'password': hash_password(new_password),
        })
        if not updated_user:
            raise UpdateFailedError("Could not update user details.")
        return to_public(updated_user)
