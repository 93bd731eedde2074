"""Map open-vocabulary class names onto the Dog and Cat labels.

General image classifiers report fine-grained class names such as
"golden retriever" or "Egyptian cat". Matching is by case-insensitive
substring, and dog keywords are always checked before cat keywords so an
identifier containing both resolves to "Dog".
"""

DOG_LABEL = "Dog"
CAT_LABEL = "Cat"

DOG_KEYWORDS = (
    "dog",
    "puppy",
    "hound",
    "retriever",
    "shepherd",
    "labrador",
    "bulldog",
    "beagle",
    "german shepherd",
    "golden retriever",
    "husky",
    "poodle",
    "chihuahua",
    "boxer",
    "doberman",
    "rottweiler",
    "dachshund",
    "shih tzu",
    "corgi",
    "collie",
    "terrier",
    "spaniel",
    "mastiff",
    "saint bernard",
    "great dane",
    "dalmatian",
    "samoyed",
    "akita",
    "shiba inu",
    "malamute",
    "chow chow",
    "pomeranian",
    "bichon frise",
)

CAT_KEYWORDS = (
    "cat",
    "kitten",
    "tabby",
    "siamese",
    "persian",
    "maine coon",
    "ragdoll",
    "british shorthair",
    "sphynx",
    "bengal",
    "abyssinian",
    "birman",
    "russian blue",
    "norwegian forest cat",
    "scottish fold",
    "american shorthair",
    "exotic shorthair",
    "burmese",
    "tonkinese",
    "balinese",
    "javanese",
    "oriental",
    "himalayan",
)


def unknown_label(identifier: str) -> str:
    """Label used for identifiers matching neither keyword set."""
    return f"Unknown({identifier})"


def map_label(identifier: str) -> str:
    """Translate an engine class name into "Dog", "Cat" or "Unknown(...)".

    Args:
        identifier: Class name reported by the engine.

    Returns:
        "Dog" if any dog keyword is a substring of the lower-cased
        identifier, otherwise "Cat" if any cat keyword is, otherwise
        "Unknown(<identifier>)" with the original casing preserved.

    """
    lowered = identifier.lower()

    if any(keyword in lowered for keyword in DOG_KEYWORDS):
        return DOG_LABEL
    if any(keyword in lowered for keyword in CAT_KEYWORDS):
        return CAT_LABEL
    return unknown_label(identifier)
