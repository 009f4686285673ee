"""
Auth Module - Field Validation
================================
Pure checks on registration and login input. Each function returns a
{field: message} mapping; an empty mapping means the input is valid.
Field names match the JSON keys the front end sends.
"""

import re
from typing import Dict, Optional

from common.helpers import is_non_empty_string, strip_whitespace

PASSWORD_MIN_LENGTH = 12

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^[0-9]{10}$")

_LOWER = re.compile(r"[a-z]")
_UPPER = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"[0-9]")
_SPECIAL = re.compile(r"[^A-Za-z0-9]")

MSG_NOM_REQUIRED = "Le nom est requis."
MSG_PRENOM_REQUIRED = "Le prénom est requis."
MSG_EMAIL_REQUIRED = "L'email est requis."
MSG_EMAIL_INVALID = "Email invalide."
MSG_PHONE_REQUIRED = "Le téléphone est requis."
MSG_PHONE_INVALID = "Téléphone invalide (10 chiffres)."
MSG_PASSWORD_REQUIRED = "Le mot de passe est requis."
MSG_PASSWORD_LENGTH = f"Le mot de passe doit contenir au moins {PASSWORD_MIN_LENGTH} caractères."
MSG_PASSWORD_COMPLEXITY = (
    "Le mot de passe doit contenir au moins une majuscule, une minuscule, "
    "un chiffre et un caractère spécial."
)
MSG_CONFIRM_REQUIRED = "La confirmation est requise."
MSG_CONFIRM_MISMATCH = "Les mots de passe ne correspondent pas."


def check_email(email) -> Optional[str]:
    if not is_non_empty_string(email):
        return MSG_EMAIL_REQUIRED
    if not EMAIL_RE.match(email.strip()):
        return MSG_EMAIL_INVALID
    return None


def check_telephone(telephone) -> Optional[str]:
    if not is_non_empty_string(telephone):
        return MSG_PHONE_REQUIRED
    if not PHONE_RE.match(strip_whitespace(telephone)):
        return MSG_PHONE_INVALID
    return None


def check_password_policy(password) -> Optional[str]:
    """Presence, minimum length, then all four character classes."""
    if not is_non_empty_string(password):
        return MSG_PASSWORD_REQUIRED
    if len(password) < PASSWORD_MIN_LENGTH:
        return MSG_PASSWORD_LENGTH
    classes = (_LOWER, _UPPER, _DIGIT, _SPECIAL)
    if not all(c.search(password) for c in classes):
        return MSG_PASSWORD_COMPLEXITY
    return None


def validate_registration(
    nom, prenom, email, telephone, mot_de_passe,
    confirm_mot_de_passe=None,
    check_confirmation: bool = True,
) -> Dict[str, str]:
    """
    Full rule set for account creation.

    The confirmation rule only applies when ``check_confirmation`` is set;
    API clients that send the five account fields without a confirmation
    skip it.
    """
    errors: Dict[str, str] = {}

    if not is_non_empty_string(nom):
        errors["nom"] = MSG_NOM_REQUIRED
    if not is_non_empty_string(prenom):
        errors["prenom"] = MSG_PRENOM_REQUIRED

    for field, message in (
        ("email", check_email(email)),
        ("telephone", check_telephone(telephone)),
        ("motDePasse", check_password_policy(mot_de_passe)),
    ):
        if message:
            errors[field] = message

    if check_confirmation:
        if not is_non_empty_string(confirm_mot_de_passe):
            errors["confirmMotDePasse"] = MSG_CONFIRM_REQUIRED
        elif confirm_mot_de_passe != mot_de_passe:
            errors["confirmMotDePasse"] = MSG_CONFIRM_MISMATCH

    return errors


def validate_login(email, mot_de_passe) -> Dict[str, str]:
    """Login only checks the email shape and that a password was typed."""
    errors: Dict[str, str] = {}
    message = check_email(email)
    if message:
        errors["email"] = message
    if not is_non_empty_string(mot_de_passe):
        errors["motDePasse"] = MSG_PASSWORD_REQUIRED
    return errors
