"""Application services layer.

Services coordinate the GraphQL client, storage and the image codec, and keep
the display state (lists, error messages) a UI binds to.
"""
