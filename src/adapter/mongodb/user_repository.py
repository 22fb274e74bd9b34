"""MongoDB implementation of UserRepository."""

from logging import getLogger
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import PyMongoError
from adapter.mongodb import USERS_COLLECTION_NAME
from domain.model.user import User
from port.user_repository import UserStoreError

logger = getLogger(__name__)

# Stored camelCase in users documents; the domain field is wallet_id
WALLET_ID_FIELD = 'walletId'


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            token=doc['token'],
            name=doc['name'],
            avatar=doc['avatar'],
            contact=doc['contact'],
            wallet_id=doc.get(WALLET_ID_FIELD),
            income=doc.get('income', 0),
            bookings=list(doc.get('bookings', [])),
            listings=list(doc.get('listings', [])),
        )

    def _find_one_and_set(self, user_id: str, fields: dict, action: str) -> User | None:
        """Atomically $set fields on an existing user; never upserts."""
        try:
            doc = self.collection.find_one_and_update(
                {'_id': user_id},
                {'$set': fields},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error(f"Failed to {action}", extra={"userId": user_id, "error": str(e)})
            raise UserStoreError(f"Failed to {action}: {e}") from e

        if doc is None:
            logger.debug(f"No user matched for {action}", extra={"userId": user_id})
            return None
        return self._to_domain(doc)

    # ── write operations ─────────────────────────────────────

    def set_token(self, user_id: str, token: str) -> User | None:
        return self._find_one_and_set(user_id, {'token': token}, 'rotate token')

    def update_profile(
        self, user_id: str, name: str, avatar: str, contact: str, token: str,
    ) -> User | None:
        return self._find_one_and_set(
            user_id,
            {'name': name, 'avatar': avatar, 'contact': contact, 'token': token},
            'update profile',
        )

    def set_wallet(self, user_id: str, wallet_id: str | None) -> User | None:
        return self._find_one_and_set(user_id, {WALLET_ID_FIELD: wallet_id}, 'set wallet')

    def create(
        self, user_id: str, name: str, avatar: str, contact: str, token: str,
    ) -> User | None:
        """Insert a new user, then read it back by the inserted ID."""
        user_doc = {
            '_id': user_id,
            'token': token,
            'name': name,
            'avatar': avatar,
            'contact': contact,
            'income': 0,
            'bookings': [],
            'listings': [],
        }
        try:
            result = self.collection.insert_one(user_doc)
            logger.info("User inserted", extra={"userId": user_id})
            doc = self.collection.find_one({'_id': result.inserted_id})
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"userId": user_id, "error": str(e)})
            raise UserStoreError(f"Failed to create user: {e}") from e

        return self._to_domain(doc) if doc else None

    # ── read operations ──────────────────────────────────────

    def get_by_token(self, user_id: str, token: str) -> User | None:
        """Find a user whose ID and session token both match."""
        try:
            doc = self.collection.find_one({'_id': user_id, 'token': token})
        except PyMongoError as e:
            logger.error("Failed to authorize user", extra={"userId": user_id, "error": str(e)})
            raise UserStoreError(f"Failed to get user: {e}") from e
        return self._to_domain(doc) if doc else None
