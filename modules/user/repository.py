"""
User Module - Persistence
==========================
The user store used by the auth service: lookup by email and insert.
Database errors never leave this module as SQLAlchemy exceptions; they are
translated into StoreError / UniqueConstraintViolation.
"""

from abc import ABC, abstractmethod
from typing import Optional

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from common.exceptions import StoreError, UniqueConstraintViolation
from modules.user.models import User


class UserStore(ABC):
    """Contract of the persistent user store."""

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[User]:
        """Return the account registered with this exact email, or None."""

    @abstractmethod
    def insert(self, nom: str, prenom: str, email: str, telephone: str, password_hash: str) -> int:
        """Persist a new account and return its generated id."""


class UserRepository(UserStore):
    """SQLAlchemy-backed user store, bound to one request's session."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> Optional[User]:
        try:
            return self.db.query(User).filter(User.email == email).first()
        except SQLAlchemyError as e:
            raise StoreError(f"User lookup failed: {e}", original=e) from e

    def insert(self, nom: str, prenom: str, email: str, telephone: str, password_hash: str) -> int:
        user = User(
            nom=nom,
            prenom=prenom,
            email=email,
            telephone=telephone,
            password_hash=password_hash,
        )
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        except IntegrityError as e:
            self.db.rollback()
            raise UniqueConstraintViolation(f"User insert rejected: {e.orig}", original=e) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(f"User insert failed: {e}", original=e) from e
        return user.id
