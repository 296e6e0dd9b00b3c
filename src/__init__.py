"""
TVTrack - Suivi personnel de series TV.

Ce package fournit un service de suivi de series : recherche dans le catalogue
TMDB (via un proxy qui garde la cle API cote serveur), liste personnelle avec
statut/note/notes, episodes vus et statistiques agregees.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, exceptions)
- services/ : Couche application (cas d'utilisation, orchestration)
- adapters/ : Couche infrastructure (CLI, clients API)
- infrastructure/ : Persistance SQLModel
- web/ : API HTTP FastAPI
"""

__version__ = "0.1.0"
