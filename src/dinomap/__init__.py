"""Dino Atlas: world map of dinosaur fossil finds."""

__version__ = "0.1.0"
