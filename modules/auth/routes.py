"""
Auth Module - Routes
=====================
Account registration and login (JSON API).

NOTE: no session or token is issued; a successful login returns the
sanitized user record and the client keeps it.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from config.database import get_db
from common.exceptions import (
    ValidationError, DuplicateEmailError, InvalidCredentialsError, StoreUnavailableError,
)
from modules.auth.service import AuthService, auth_service
from modules.user.repository import UserRepository

logger = logging.getLogger("boutique.auth")

router = APIRouter(prefix="/api/auth", tags=["auth"])


# ==========================================
# Schemas
# ==========================================

class RegisterRequest(BaseModel):
    nom: Optional[str] = None
    prenom: Optional[str] = None
    email: Optional[str] = None
    telephone: Optional[str] = None
    mot_de_passe: Optional[str] = Field(None, alias="motDePasse")
    confirm_mot_de_passe: Optional[str] = Field(None, alias="confirmMotDePasse")


class LoginRequest(BaseModel):
    email: Optional[str] = None
    mot_de_passe: Optional[str] = Field(None, alias="motDePasse")


def get_auth_service() -> AuthService:
    """FastAPI dependency (overridable in tests)."""
    return auth_service


def _error(message: str, status_code: int, errors: Optional[dict] = None) -> JSONResponse:
    body = {"message": message}
    if errors:
        body["errors"] = errors
    return JSONResponse(body, status_code=status_code)


# ==========================================
# POST /api/auth/register
# ==========================================

@router.post("/register")
def register(
    body: RegisterRequest,
    db: Session = Depends(get_db),
    service: AuthService = Depends(get_auth_service),
):
    """Create an account. 201 with the user, 400 on invalid fields, 409 if the email is taken."""
    try:
        user = service.register(
            UserRepository(db),
            body.nom, body.prenom, body.email, body.telephone, body.mot_de_passe,
            confirm_mot_de_passe=body.confirm_mot_de_passe,
        )
    except ValidationError as e:
        return _error(e.message, 400, e.errors)
    except DuplicateEmailError as e:
        return _error(e.message, 409)
    except StoreUnavailableError as e:
        return _error(e.message, 500)
    except Exception:
        logger.exception("Unexpected error in /api/auth/register")
        return _error("Erreur serveur pendant l'inscription. Veuillez réessayer.", 500)

    return JSONResponse({"message": "Inscription réussie.", "user": user}, status_code=201)


# ==========================================
# POST /api/auth/login
# ==========================================

@router.post("/login")
def login(
    body: LoginRequest,
    db: Session = Depends(get_db),
    service: AuthService = Depends(get_auth_service),
):
    """Check credentials. 200 with the user, 400 on missing fields, 401 on bad credentials."""
    try:
        user = service.login(UserRepository(db), body.email, body.mot_de_passe)
    except ValidationError as e:
        return _error(e.message, 400, e.errors)
    except InvalidCredentialsError as e:
        return _error(e.message, 401)
    except StoreUnavailableError as e:
        return _error(e.message, 500)
    except Exception:
        logger.exception("Unexpected error in /api/auth/login")
        return _error("Erreur serveur pendant la connexion. Veuillez réessayer.", 500)

    return JSONResponse({"message": "Connexion réussie.", "user": user}, status_code=200)
