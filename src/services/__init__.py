"""
Services applicatifs (cas d'usage).

- auth : inscription, connexion, profil
- watchlist : series suivies, episodes vus, liens (via le miroir show_store)
- catalog : recherche, decouverte, pagination infinie
- stats : statistiques et rang de l'utilisateur
- calendar : episodes diffuses non vus
- watch_links : generation des liens de visionnage
"""
