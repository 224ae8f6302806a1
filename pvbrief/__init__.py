"""Local-first store and renderers for the photovoltaic morning brief.

The digest is a fixed-shape set of nine headlines that gets edited by hand,
kept in a small key-value store and rendered for chat bots and web pages.
"""

__all__: list[str] = []
