"""Unit stat browser and stat computation engine."""

__all__ = [
    "config",
    "sheet_client",
    "sheet_ingest",
    "normalize",
    "stats",
    "game_data",
    "level_scaling",
    "mod_effects",
    "engine",
    "catalog",
    "report",
    "render",
]
