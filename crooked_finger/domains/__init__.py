"""Domain layer (models and text extraction).

Domain modules do not touch the network or storage.
"""
