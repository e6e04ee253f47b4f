"""A two-player networked reflex duel: pygame client, lobby server and game logic."""

__version__ = "0.1.0"