"""
Couche infrastructure de TVTrack.

Ce module contient les implementations concretes des interfaces repository
definies dans la couche domaine (ports) :

- persistence/ : Stockage SQLite avec SQLModel (modeles et repositories)

Architecture hexagonale : changer de moteur (ex: PostgreSQL) ne touche
que cette couche.
"""
