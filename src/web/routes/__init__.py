"""Routeurs de l'API JSON."""
