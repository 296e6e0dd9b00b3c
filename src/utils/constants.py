"""
Constantes globales pour TVTrack.

Ce module contient les constantes utilisees dans l'application:
- URLs et tailles d'images TMDB
- Libelles des statuts de visionnage
- Mapping des IDs de genre TV TMDB (fallback) et couleurs associees
- Paliers de rang selon le temps de visionnage
- Table de translitteration des caracteres turcs pour les slugs
"""

# Images TMDB
TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p"
PLACEHOLDER_POSTER_URL = "https://placehold.co/500x750?text=Resim+Yok"

# Avatars DiceBear
AVATAR_URL_TEMPLATE = "https://api.dicebear.com/7.x/{style}/svg?seed={seed}"
DEFAULT_AVATAR_STYLE = "adventurer"

# Libelles affiches des statuts, indexes par valeur de WatchStatus
STATUS_LABELS = {
    "watching": "İzleniyor",
    "completed": "Tamamlandı",
    "dropped": "Bırakıldı",
    "plan_to_watch": "İzlenecek",
}

# Duree d'episode supposee quand le catalogue n'en donne aucune (minutes)
DEFAULT_EPISODE_RUNTIME = 45

# Genre affiche quand aucune serie n'a de genre
UNKNOWN_GENRE_LABEL = "Belirsiz"

# Limites de saisie utilisateur
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
NOTE_MAX_LENGTH = 1000
PASSWORD_MIN_LENGTH = 6
RATING_MIN = 1
RATING_MAX = 10

# Mapping des IDs de genre TV TMDB vers noms (fallback si l'API n'en renvoie pas)
# Source: https://api.themoviedb.org/3/genre/tv/list
TMDB_TV_GENRE_MAPPING = {
    10759: "Action & Adventure",
    16: "Animation",
    35: "Comedy",
    80: "Crime",
    99: "Documentary",
    18: "Drama",
    10751: "Family",
    10762: "Kids",
    9648: "Mystery",
    10763: "News",
    10764: "Reality",
    10765: "Sci-Fi & Fantasy",
    10766: "Soap",
    10767: "Talk",
    10768: "War & Politics",
    37: "Western",
}

# Couleurs des genres pour les graphiques de statistiques
DEFAULT_GENRE_COLOR = "#6b7280"
GENRE_COLORS = {
    10759: "#ef4444",
    16: "#f59e0b",
    35: "#eab308",
    80: "#dc2626",
    99: "#64748b",
    18: "#3b82f6",
    10751: "#8b5cf6",
    10762: "#06b6d4",
    9648: "#6366f1",
    10763: "#14b8a6",
    10764: "#f43f5e",
    10765: "#8b5cf6",
    10766: "#ec4899",
    10767: "#84cc16",
    10768: "#d946ef",
    37: "#78350f",
}

# Paliers de rang : (seuil en heures, titre, icone, rang suivant)
# Le dernier palier n'a pas de seuil superieur.
RANK_TIERS = (
    (10, "Acemi Gözlemci", "🌱", "Dizi Tutkunu"),
    (100, "Dizi Tutkunu", "📺", "Binge Master"),
    (500, "Binge Master", "👑", "Time Lord"),
)
MAX_RANK = ("Time Lord", "⏳", "Max Level")

# Placeholders des gabarits de liens de visionnage
SHOW_NAME_PLACEHOLDER = "%dizi_adi%"
SEASON_PLACEHOLDER = "%sezon%"
EPISODE_PLACEHOLDER = "%bolum%"

# Translitteration des caracteres turcs (appliquee apres passage en minuscules)
TURKISH_CHAR_MAP = {
    "ç": "c", "Ç": "c",
    "ğ": "g", "Ğ": "g",
    "ı": "i", "I": "i",
    "İ": "i", "i": "i",
    "ö": "o", "Ö": "o",
    "ş": "s", "Ş": "s",
    "ü": "u", "Ü": "u",
}
