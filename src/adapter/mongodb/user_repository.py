"""MongoDB implementation of UserRepository."""

from datetime import datetime, timezone
from logging import getLogger

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb.connection import USERS_COLLECTION_NAME
from domain.model.errors import DuplicateEmailError, StorageError
from domain.model.user import NewUser, Role, User

logger = getLogger(__name__)


def _object_id(user_id: str) -> ObjectId | None:
    """Parse a user id; malformed ids map to None so lookups simply miss."""
    try:
        return ObjectId(user_id)
    except (InvalidId, TypeError):
        return None


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection.

        Email uniqueness only applies to non-deleted users, so a soft-deleted
        account does not block re-registration with the same address.
        """
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(
                self.collection, [('email', 1)], 'idx_users_email',
                unique=True, partialFilterExpression={'deleted': False},
            )
            create_index_safe(self.collection, [('created_at', -1)], 'idx_users_created_at')
            return True
        except Exception as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=str(doc['_id']),
            email=doc['email'],
            password_hash=doc['password_hash'],
            first_name=doc.get('first_name', ''),
            last_name=doc.get('last_name', ''),
            phone=doc.get('phone', ''),
            address=doc.get('address', ''),
            city=doc.get('city', ''),
            postal=doc.get('postal', ''),
            country=doc.get('country', ''),
            role=Role(doc.get('role', Role.CUSTOMER.value)),
            activated=doc.get('activated', False),
            deleted=doc.get('deleted', False),
            banned=doc.get('banned', False),
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
        )

    # ── write operations ─────────────────────────────────────

    def create(self, new_user: NewUser) -> User:
        """Insert a user document and return the User with its generated id."""
        user_doc = {
            'email': new_user.email,
            'password_hash': new_user.password_hash,
            'first_name': new_user.first_name,
            'last_name': new_user.last_name,
            'phone': new_user.phone,
            'address': new_user.address,
            'city': new_user.city,
            'postal': new_user.postal,
            'country': new_user.country,
            'role': new_user.role.value,
            'activated': new_user.activated,
            'deleted': new_user.deleted,
            'banned': new_user.banned,
            'created_at': new_user.created_at,
            'updated_at': new_user.updated_at,
        }
        try:
            result = self.collection.insert_one(user_doc)
        except DuplicateKeyError as e:
            logger.warning("User creation failed: email already exists", extra={"email": new_user.email})
            raise DuplicateEmailError(new_user.email) from e
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"email": new_user.email, "error": str(e)})
            raise StorageError("Failed to create user") from e

        user_doc['_id'] = result.inserted_id
        user = self._to_domain(user_doc)
        logger.info("User created", extra={"userId": user.id, "email": user.email})
        return user

    def set_banned(self, user_id: str, banned: bool) -> bool:
        return self._set_flag(user_id, 'banned', banned)

    def set_activated(self, user_id: str, activated: bool) -> bool:
        return self._set_flag(user_id, 'activated', activated)

    def soft_delete(self, user_id: str) -> bool:
        return self._set_flag(user_id, 'deleted', True)

    def _set_flag(self, user_id: str, flag: str, value: bool) -> bool:
        oid = _object_id(user_id)
        if oid is None:
            return False
        try:
            result = self.collection.update_one(
                {'_id': oid, 'deleted': False},
                {'$set': {flag: value, 'updated_at': datetime.now(timezone.utc)}},
            )
        except PyMongoError as e:
            logger.error("Failed to update user flag", extra={"userId": user_id, "flag": flag, "error": str(e)})
            raise StorageError("Failed to update user") from e

        if result.modified_count > 0:
            logger.info("User flag updated", extra={"userId": user_id, "flag": flag, "value": value})
            return True
        return False

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        """Find a non-deleted user by email. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'email': email, 'deleted': False})
        except PyMongoError as e:
            logger.error("Failed to get user by email", extra={"email": email, "error": str(e)})
            raise StorageError("Failed to look up user") from e
        return self._to_domain(doc) if doc else None

    def get_by_id(self, user_id: str) -> User | None:
        """Find a non-deleted user by ID. Return User or None if not found or malformed."""
        oid = _object_id(user_id)
        if oid is None:
            logger.debug("Malformed user id", extra={"userId": user_id})
            return None
        try:
            doc = self.collection.find_one({'_id': oid, 'deleted': False})
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise StorageError("Failed to look up user") from e
        return self._to_domain(doc) if doc else None
