"""
Routes d'authentification : inscription, connexion, déconnexion, profil.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends

from ..deps import AuthDep, ContainerDep, CurrentUser, get_token
from ..schemas import LoginRequest, ProfileUpdate, RegisterRequest, user_payload

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", status_code=201)
def register(body: RegisterRequest, auth: AuthDep) -> dict:
    user = auth.register(body.email, body.password, body.username)
    token = auth.sign_in(body.email, body.password)
    return {"user": user_payload(user), "token": token}


@router.post("/login")
def login(body: LoginRequest, auth: AuthDep) -> dict:
    token = auth.sign_in(body.email, body.password)
    return {"user": user_payload(auth.current_user(token)), "token": token}


@router.post("/logout", status_code=204)
def logout(
    user: CurrentUser,
    auth: AuthDep,
    container: ContainerDep,
    token: Annotated[Optional[str], Depends(get_token)],
) -> None:
    auth.sign_out(token)
    container.show_stores().drop(user.id)


@router.get("/me")
def me(user: CurrentUser) -> dict:
    return user_payload(user)


@router.patch("/profile")
def update_profile(body: ProfileUpdate, user: CurrentUser, auth: AuthDep) -> dict:
    updated = auth.update_profile(
        user,
        username=body.username,
        avatar_style=body.avatar_style,
        avatar_seed=body.avatar_seed,
    )
    return user_payload(updated)
