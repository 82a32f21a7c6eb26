"""French heuristic word lists used by the classifier, location matcher and age formatter.

The matching logic lives in ``processors.classifier`` and ``core.sources``; this
module only holds data so the lists can be revised without touching code.
Bump ``LEXICON_VERSION`` whenever a list changes.
"""

LEXICON_VERSION = "2024.1"

# Substrings that mark a post as a help request (matched lower-cased).
QUESTION_INDICATORS = (
    "comment",
    "conseil",
    "aide",
    "besoin",
    "cherche",
    "recherche",
    "question",
    "avis",
    "problème",
    "solution",
    "svp",
    "urgent",
    "sos",
    "qui peut",
    "quelqu'un",
    "possible",
    "impossible",
    "difficile",
    "galère",
    "bug",
    "erreur",
    "bloqué",
    "help",
    "astuce",
    "débutant",
)

# Leading words of an interrogative title.
INTERROGATIVE_WORDS = (
    "comment",
    "pourquoi",
    "quand",
    "où",
    "qui",
    "que",
    "quel",
    "quelle",
    "quels",
    "quelles",
    "combien",
)

FRANCE_REGION = "france"

FRENCH_LOCATION_ALIASES = (
    "france",
    "fr",
    "french",
    "français",
    "ile-de-france",
    "idf",
    "paris",
    "lyon",
    "marseille",
    "toulouse",
    "bordeaux",
    "lille",
    "nantes",
    "strasbourg",
    "rennes",
    "reims",
    "nice",
    "montpellier",
)

# Relative-age wording, keyed by unit. Each entry is (singular, plural) and
# uses ``{count}`` as placeholder.
AGE_UNITS = {
    "less_than_minute": ("moins d'une minute", "moins de {count} minutes"),
    "minute": ("1 minute", "{count} minutes"),
    "about_hour": ("environ 1 heure", "environ {count} heures"),
    "day": ("1 jour", "{count} jours"),
    "about_month": ("environ 1 mois", "environ {count} mois"),
    "month": ("1 mois", "{count} mois"),
    "about_year": ("environ 1 an", "environ {count} ans"),
    "over_year": ("plus d'un an", "plus de {count} ans"),
    "almost_year": ("presque 1 an", "presque {count} ans"),
}
AGE_PAST_TEMPLATE = "il y a {distance}"
AGE_FUTURE_TEMPLATE = "dans {distance}"
