"""Track geometry, random track generation, track layout, name entry and save handling for a neon driving game."""

__version__ = "0.1.0"
__all__ = ["layout", "name_entry", "road", "save", "track_generator", "tracks"]