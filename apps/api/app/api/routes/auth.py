from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.api.schemas import AuthOut, LoginIn, MeOut, MessageOut, SignupIn, UserProfileOut, UserPublicOut
from app.auth.cookies import clear_session_cookie, set_session_cookie
from app.auth.deps import CurrentIdentity
from app.auth.jwt import issue_session_token
from app.db import get_db
from app.services import authenticate, create_user, get_user

router = APIRouter(prefix="/auth", tags=["auth"])

DBSession = Annotated[Session, Depends(get_db)]


@router.post("/signup", response_model=AuthOut, status_code=201)
def signup(payload: SignupIn, db: DBSession, response: Response):
    user = create_user(db, payload.email, payload.name, payload.password)
    set_session_cookie(response, issue_session_token(user.id, user.email))
    return AuthOut(message="User created successfully", user=UserPublicOut.model_validate(user))


@router.post("/login", response_model=AuthOut)
def login(payload: LoginIn, db: DBSession, response: Response):
    user = authenticate(db, payload.email, payload.password)
    set_session_cookie(response, issue_session_token(user.id, user.email))
    return AuthOut(message="Logged in successfully", user=UserPublicOut.model_validate(user))


@router.get("/me", response_model=MeOut)
def me(identity: CurrentIdentity, db: DBSession):
    user = get_user(db, identity.user_id)
    return MeOut(user=UserProfileOut.model_validate(user))


@router.post("/logout", response_model=MessageOut)
def logout(response: Response):
    clear_session_cookie(response)
    return MessageOut(message="Logged out successfully")
