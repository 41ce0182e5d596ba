import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core import security
from app.core.errors import AdminNotFound, DuplicateIdentity, InvalidCredentials, StoreFailure
from app.models.admin import Admin

logger = logging.getLogger(__name__)


class CredentialStore:
    """Admin accounts and their password hashes."""

    def __init__(self, db: Session, rounds: int = None):
        self.db = db
        self.rounds = rounds

    def create_admin(self, username: str, raw_password: str, email: str) -> Admin:
        """
        Register a new admin.

        The pre-checks only pick the error message; the unique constraints on
        admins.username and admins.email decide concurrent signups.

        Raises:
            DuplicateIdentity: username or email already registered
        """
        if self.db.query(Admin.id).filter(Admin.username == username).first():
            raise DuplicateIdentity("Username is already taken")
        if self.db.query(Admin.id).filter(Admin.email == email).first():
            raise DuplicateIdentity("Email is already registered")

        admin = Admin(
            username=username,
            email=email,
            password_hash=security.hash_password(raw_password, rounds=self.rounds),
        )
        try:
            self.db.add(admin)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.info("Concurrent signup lost the race for username=%s", username)
            raise DuplicateIdentity("Username or email is already registered")
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Failed to store admin username=%s", username)
            raise StoreFailure()

        self.db.refresh(admin)
        logger.info("Created admin id=%s username=%s", admin.id, username)
        return admin

    def find_by_username(self, username: str) -> Admin:
        admin = self.db.query(Admin).filter(Admin.username == username).first()
        if admin is None:
            raise AdminNotFound()
        return admin

    def get(self, admin_id: int) -> Admin:
        admin = self.db.get(Admin, admin_id)
        if admin is None:
            raise AdminNotFound()
        return admin

    def verify_password(self, admin: Admin, raw_password: str) -> bool:
        return security.verify_password(raw_password, admin.password_hash)

    def authenticate(self, username: str, raw_password: str) -> Admin:
        """
        Resolve username/password to an admin.

        Unknown usernames still pay for a bcrypt check so both failures look
        the same to the caller, message and timing alike.
        """
        try:
            admin = self.find_by_username(username)
        except AdminNotFound:
            security.verify_password(raw_password, security.DUMMY_PASSWORD_HASH)
            logger.info("Login failed for username=%s", username)
            raise InvalidCredentials()

        if not self.verify_password(admin, raw_password):
            logger.info("Login failed for username=%s", username)
            raise InvalidCredentials()

        return admin
