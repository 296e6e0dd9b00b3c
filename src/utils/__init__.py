"""
Utilitaires et constantes pour TVTrack.

Ce module contient les constantes et fonctions utilitaires partagees.
"""
