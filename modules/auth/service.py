"""
Auth Module - Service Layer
=============================
Business logic for account registration and email/password login.
"""

import logging
from typing import Optional

from common.exceptions import (
    ValidationError, DuplicateEmailError, InvalidCredentialsError,
    StoreUnavailableError, StoreError, UniqueConstraintViolation,
)
from common.helpers import strip_whitespace
from common.security import BcryptHasher
from modules.auth.validators import validate_registration, validate_login
from modules.user.repository import UserStore

logger = logging.getLogger("boutique.auth")

PUBLIC_USER_FIELDS = ("id", "nom", "prenom", "email", "telephone")


def sanitize_user(user) -> dict:
    """Outward view of an account: never includes the password hash."""
    return {field: getattr(user, field) for field in PUBLIC_USER_FIELDS}


class AuthService:
    """
    Registration and login against a user store.

    The hasher is any object with ``hash(secret)`` and ``verify(secret, digest)``;
    production uses bcrypt, tests can pass something fast.
    """

    def __init__(self, hasher=None):
        self.hasher = hasher or BcryptHasher()

    def register(
        self, store: UserStore,
        nom: str, prenom: str, email: str, telephone: str, mot_de_passe: str,
        confirm_mot_de_passe: Optional[str] = None,
    ) -> dict:
        """
        Create a new account.

        Returns:
            sanitized user dict {id, nom, prenom, email, telephone}

        Raises:
            ValidationError, DuplicateEmailError, StoreUnavailableError
        """
        errors = validate_registration(
            nom, prenom, email, telephone, mot_de_passe,
            confirm_mot_de_passe=confirm_mot_de_passe,
            check_confirmation=confirm_mot_de_passe is not None,
        )
        if errors:
            raise ValidationError(errors)

        nom = nom.strip()
        prenom = prenom.strip()
        email = email.strip()
        tel = strip_whitespace(telephone)

        try:
            # Advisory only: the unique constraint on users.email is authoritative
            if store.find_by_email(email) is not None:
                raise DuplicateEmailError()

            password_hash = self.hasher.hash(mot_de_passe)

            user_id = store.insert(
                nom=nom, prenom=prenom, email=email,
                telephone=tel, password_hash=password_hash,
            )
        except UniqueConstraintViolation:
            # Lost the race against a concurrent registration
            logger.info("Registration for %s rejected by unique constraint", email)
            raise DuplicateEmailError()
        except StoreError as e:
            logger.error("User store failure during registration: %s", e.detail)
            raise StoreUnavailableError("Erreur serveur pendant l'inscription. Veuillez réessayer.")

        logger.info("New account #%s registered", user_id)
        return {
            "id": user_id,
            "nom": nom,
            "prenom": prenom,
            "email": email,
            "telephone": tel,
        }

    def login(self, store: UserStore, email: str, mot_de_passe: str) -> dict:
        """
        Check an email/password pair.

        Returns:
            sanitized user dict

        Raises:
            ValidationError, InvalidCredentialsError, StoreUnavailableError
        """
        errors = validate_login(email, mot_de_passe)
        if errors:
            raise ValidationError(errors)

        try:
            user = store.find_by_email(email.strip())
        except StoreError as e:
            logger.error("User store failure during login: %s", e.detail)
            raise StoreUnavailableError("Erreur serveur pendant la connexion. Veuillez réessayer.")

        if user is None:
            raise InvalidCredentialsError()

        if not self.hasher.verify(mot_de_passe, user.password_hash):
            raise InvalidCredentialsError()

        logger.info("Account #%s logged in", user.id)
        return sanitize_user(user)


# Singleton instance
auth_service = AuthService()
