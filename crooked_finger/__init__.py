"""Crooked Finger client core: GraphQL access, credentials, images and pattern extraction."""

__version__ = "0.1.0"
