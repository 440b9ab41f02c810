"""
Application Interfaces (Ports)

Abstract interfaces that define contracts between the application
layer and infrastructure adapters.
"""

from voice_music_player.application.interfaces.remote_catalog import RemoteCatalog

__all__ = [
    "RemoteCatalog",
]
