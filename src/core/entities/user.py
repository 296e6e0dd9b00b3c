"""
Entite utilisateur.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from src.utils.constants import AVATAR_URL_TEMPLATE, DEFAULT_AVATAR_STYLE


@dataclass
class User:
    """
    Compte utilisateur.

    Attributs :
        id : ID interne en base
        email : Adresse email (unique, sert d'identifiant de connexion)
        username : Nom d'utilisateur affiche (unique)
        avatar_style : Style DiceBear de l'avatar
        avatar_seed : Graine DiceBear (defaut : email)
    """

    id: Optional[int] = None
    email: str = ""
    username: str = ""
    avatar_style: str = DEFAULT_AVATAR_STYLE
    avatar_seed: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def avatar_url(self) -> str:
        """URL de l'avatar genere par DiceBear."""
        seed = self.avatar_seed or self.email
        return AVATAR_URL_TEMPLATE.format(style=self.avatar_style, seed=seed)
