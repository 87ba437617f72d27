"""NEO FLAPPY - endless side-scrolling reflex arcade game."""

__version__ = "1.0.0"
