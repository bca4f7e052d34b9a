"""Infrastructure layer (network, credential storage, media).

Nothing here depends on the services layer.
"""
