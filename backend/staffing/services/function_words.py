"""
Punctuation and function-word tables used by keyword synthesis.

Records are written in English and Finnish, so stop-word stripping uses
both languages. "+" and "#" are not punctuation here: skill names such as
"c++" and "c#" must survive normalization intact.
"""

PUNCTUATION = [
    "...", "…",
    ".", ",", ";", ":", "!", "?",
    "(", ")", "[", "]", "{", "}", "<", ">",
    "\"", "'", "`", "´",
    "“", "”", "„", "‘", "’", "«", "»",
    "-", "–", "—", "_",
    "/", "\\", "|",
    "*", "&", "^", "%", "$", "€", "£", "@", "~", "=",
    "•", "·",
]

FUNCTION_WORDS_EN = [
    "a", "about", "above", "after", "again", "against", "all", "also", "am",
    "an", "and", "any", "are", "as", "at", "be", "because", "been", "before",
    "being", "below", "between", "both", "but", "by", "can", "could", "did",
    "do", "does", "doing", "down", "during", "each", "either", "etc", "ever",
    "every", "few", "for", "from", "further", "had", "has", "have", "having",
    "he", "her", "here", "hers", "herself", "him", "himself", "his", "how",
    "however", "i", "if", "in", "into", "is", "its", "itself", "just", "me",
    "may", "might", "more", "most", "must", "my", "myself", "neither", "no",
    "nor", "not", "of", "off", "on", "once", "only", "or", "other", "ought",
    "our", "ours", "ourselves", "out", "over", "own", "per", "same", "shall",
    "she", "should", "so", "some", "such", "than", "that", "the", "their",
    "theirs", "them", "themselves", "then", "there", "these", "they", "this",
    "those", "through", "thus", "to", "too", "under", "until", "up", "upon",
    "us", "very", "via", "was", "we", "were", "what", "when", "where",
    "whether", "which", "while", "who", "whom", "whose", "why", "will",
    "with", "within", "without", "would", "yet", "you", "your", "yours",
    "yourself", "yourselves",
]

FUNCTION_WORDS_FI = [
    "ai", "aina", "alla", "alle", "asti", "ei", "eikä", "eivät", "emme",
    "en", "ennen", "entä", "eri", "esim", "et", "ette", "että", "he", "heidän",
    "heitä", "hyvin", "hän", "häneen", "hänen", "häntä", "ilman", "ja",
    "jne", "jo", "joka", "jokainen", "jokin", "joku", "jolla", "jolle",
    "jonka", "jos", "jossa", "josta", "jota", "jotka", "jotta", "juuri",
    "kaikki", "kanssa", "kautta", "keneen", "kenen", "ketkä", "ketä", "koska",
    "kuin", "kuinka", "kuitenkin", "kuka", "kun", "kuten", "lisäksi", "me",
    "meidän", "meitä", "mihin", "mikä", "miksi", "milloin", "minä", "minun",
    "minut", "missä", "mistä", "mitkä", "mitä", "miten", "mm", "mukaan",
    "mutta", "muu", "muut", "myös", "ne", "niiden", "niin", "niitä", "noin",
    "nuo", "nyt", "nämä", "näin", "ole", "olemme", "olen", "olet", "olette",
    "oli", "olivat", "olla", "ollut", "on", "ovat", "paitsi", "paljon",
    "se", "sekä", "sen", "siellä", "siihen", "siinä", "siis", "siitä",
    "siksi", "sille", "sillä", "silloin", "sinun", "sinut", "sinä", "sitä",
    "sitten", "tai", "taas", "te", "teidän", "teitä", "tuo", "tuon", "tämä",
    "tämän", "tänne", "täällä", "tässä", "tästä", "tätä", "vaan", "vaikka",
    "vain", "vielä", "voi", "voivat", "yli", "yms",
]

FUNCTION_WORDS = FUNCTION_WORDS_FI + FUNCTION_WORDS_EN
