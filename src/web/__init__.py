"""Application web FastAPI : API JSON et proxy du catalogue."""
