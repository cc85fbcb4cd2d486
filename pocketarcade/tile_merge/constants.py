"""Tile merge board dimensions, spawn odds and storage key."""

BOARD_SIZE = 4
WIN_TILE = 2048

# Tiles placed on a fresh board
INITIAL_TILES = 2

# A spawned tile is a 2 unless the draw lands at or above this threshold
SPAWN_TWO_PROBABILITY = 0.9
SPAWN_LOW_VALUE = 2
SPAWN_HIGH_VALUE = 4

STORAGE_KEY = "game2048State"
