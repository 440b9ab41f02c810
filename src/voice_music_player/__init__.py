"""Playback session engine for a voice-assistant music player."""
