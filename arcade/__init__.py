"""Grid arcade: tile-merge, piece-stacking and locomotion engines behind a menu shell."""

__version__ = "0.1.0"
