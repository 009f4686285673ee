"""
Boutique - Custom Exceptions
=============================
Business-level exceptions that can be caught and converted to HTTP responses.
"""

from typing import Dict, Optional


class BoutiqueError(Exception):
    """Base exception for all business logic errors."""
    def __init__(self, message: str = "Erreur serveur. Veuillez réessayer."):
        self.message = message
        super().__init__(self.message)


class ValidationError(BoutiqueError):
    """Raised when user input breaks one or more field rules."""
    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        # First violation doubles as the summary message
        super().__init__(next(iter(self.errors.values()), "Données invalides."))


class DuplicateEmailError(BoutiqueError):
    """Raised when an account already exists for the email."""
    def __init__(self):
        super().__init__("Un utilisateur avec cet email existe déjà.")


class InvalidCredentialsError(BoutiqueError):
    """Raised for an unknown email or a wrong password (never says which)."""
    def __init__(self):
        super().__init__("Email ou mot de passe incorrect.")


class StoreUnavailableError(BoutiqueError):
    """Raised when the user store fails; the detail goes to the logs only."""
    pass


class CatalogUnavailableError(BoutiqueError):
    """Raised when the product catalog cannot be read."""
    def __init__(self):
        super().__init__("Catalogue indisponible. Veuillez réessayer plus tard.")


# ==========================================
# Store-level errors (raised by repositories)
# ==========================================

class StoreError(Exception):
    """Generic persistence failure."""
    def __init__(self, detail: str = "", original: Optional[Exception] = None):
        self.detail = detail
        self.original = original
        super().__init__(detail)


class UniqueConstraintViolation(StoreError):
    """Insert rejected by a unique constraint."""
    pass
