"""
User API endpoints.

Handles registration, login, profile lookup and the resume list.
"""

import re
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, field_validator
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.api.deps import get_current_user_id
from app.core.security import create_access_token, get_password_hash, verify_password
from app.db.session import get_db
from app.models import User
from app.services import resume_service

router = APIRouter()

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$")


# ============== Pydantic Schemas ==============


class UserRegister(BaseModel):
    """Schema for user registration."""

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        """Validate email format and normalize to lowercase."""
        if v is None or not v.strip():
            return None
        v = v.strip().lower()
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email format")
        return v


class UserLogin(BaseModel):
    """Schema for login."""

    email: str
    password: str


# ============== Helper Functions ==============


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Get a user by email address (case-insensitive)."""
    return db.query(User).filter(User.email == email.strip().lower()).first()


def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    """Authenticate a user by email and password."""
    user = get_user_by_email(db, email)
    if not user:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


# ============== API Endpoints ==============


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(user_data: UserRegister, db: Session = Depends(get_db)):
    """
    Register a new user and return a token for immediate sign-in.
    """
    name = (user_data.name or "").strip()
    if not name or not user_data.email or not user_data.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing required fields (name, email, password)",
        )

    if get_user_by_email(db, user_data.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists with this email address",
        )

    new_user = User(
        name=name,
        email=user_data.email,
        hashed_password=get_password_hash(user_data.password),
    )
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent registration for the same email
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists with this email address",
        )
    db.refresh(new_user)

    return {
        "message": "User Created Successfully",
        "token": create_access_token(new_user.id),
        "user": new_user.to_dict(),
    }


@router.post("/login")
async def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """
    Login with email and password and get a JWT access token.
    """
    user = authenticate_user(db, credentials.email, credentials.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid Email or Password",
        )

    return {
        "message": "Login Successful!",
        "token": create_access_token(user.id),
        "user": user.to_dict(),
    }


@router.get("/data")
async def get_user_data(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Get the authenticated user's profile."""
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found!",
        )
    return {"user": user.to_dict()}


@router.get("/resumes")
async def get_user_resumes(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """List every resume of the authenticated user."""
    resumes = resume_service.list_resumes(db, user_id)
    return {"resumes": [resume.to_dict() for resume in resumes]}
