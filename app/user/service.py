import logging
import re
from uuid import uuid4

import bcrypt
from fastapi.concurrency import run_in_threadpool
from firebase_admin import firestore
from google.api_core.exceptions import AlreadyExists

from ..core.exceptions import InvalidCredentials, UsernameTaken, ValidationError
from .models import User

logger = logging.getLogger(__name__)

USERS_COLLECTION = 'users'
# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72
MAX_USERNAME_BYTES = 1500
RESERVED_ID_PATTERN = re.compile(r'^__.*__$')


def _is_valid_username(username: str) -> bool:
    # usernames double as Firestore document ids
    if len(username.encode('utf-8')) > MAX_USERNAME_BYTES or RESERVED_ID_PATTERN.match(username):
        return False
    return '/' not in username and username not in ('.', '..')


class CredentialStore:
    def __init__(self, db, rounds: int = 10):
        self.db = db
        self.rounds = rounds

    def _hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')

    @staticmethod
    def _matches(password: str, password_hash: str) -> bool:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))

    async def create(self, username: str, password: str) -> User:
        if not username or not username.strip() or not password:
            raise ValidationError("Username and password are required")
        if not _is_valid_username(username):
            raise ValidationError("Username contains invalid characters")
        if len(password.encode('utf-8')) > MAX_PASSWORD_BYTES:
            raise ValidationError("Password is too long")

        password_hash = await run_in_threadpool(self._hash, password)
        user = User(id=uuid4().hex, username=username, password_hash=password_hash)

        user_ref = self.db.collection(USERS_COLLECTION).document(username)
        try:
            await user_ref.create({
                'id': user.id,
                'username': user.username,
                'password_hash': user.password_hash,
                'created_at': firestore.SERVER_TIMESTAMP
            })
        except AlreadyExists as e:
            raise UsernameTaken() from e

        logger.info(f"User {username} created")
        return user

    async def authenticate(self, username: str, password: str) -> User:
        """Return the user for a matching username/password pair.

        Unknown users and wrong passwords raise the same ``InvalidCredentials``.
        """
        if not username or not username.strip() or not password:
            raise ValidationError("Username and password are required")
        if not _is_valid_username(username) or len(password.encode('utf-8')) > MAX_PASSWORD_BYTES:
            raise InvalidCredentials()

        user_doc = await self.db.collection(USERS_COLLECTION).document(username).get()
        if not user_doc.exists:
            raise InvalidCredentials()

        user = User(**user_doc.to_dict())
        if not await run_in_threadpool(self._matches, password, user.password_hash):
            raise InvalidCredentials()
        return user
