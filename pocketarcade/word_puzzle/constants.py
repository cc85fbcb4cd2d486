"""Word puzzle word bank, scoring and storage key."""

WORD_BANK = (
    "REACT",
    "NATIVE",
    "JAVASCRIPT",
    "MOBILE",
    "FUNCTION",
    "COMPONENT",
    "STATE",
    "HOOK",
    "PROPS",
    "ASYNC",
    "PROMISE",
    "SWIFT",
    "KOTLIN",
    "FLUTTER",
    "ANDROID",
    "IPHONE",
    "XCODE",
    "STUDIO",
    "DEBUG",
    "RENDER",
)

MAX_ATTEMPTS = 3
MIN_GUESS_LENGTH = 2
POINTS_PER_LETTER = 10

STORAGE_KEY = "wordPuzzleState"
