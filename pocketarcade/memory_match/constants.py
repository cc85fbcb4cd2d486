"""Memory match symbol set and storage key."""

# Each symbol appears on exactly two cards
CARD_SYMBOLS = ("🐶", "🐱", "🐭", "🐹", "🐰", "🦊", "🐻", "🐼")

STORAGE_KEY = "memoryGameBestScore"
