"""Centralized constants for SQLite pragmas and the remote catalog API."""

from __future__ import annotations


class SQLPragmas:
    """SQLite PRAGMA statements for database configuration.

    These pragmas are applied to each connection to ensure consistent behavior.
    """

    JOURNAL_MODE_WAL = "PRAGMA journal_mode=WAL"
    BUSY_TIMEOUT = "PRAGMA busy_timeout={timeout}"


class CatalogEndpoints:
    """Remote catalog API paths, relative to the configured base URL."""

    FAVORITES = "/me/favorites"
    ACTIVITY_STREAM = "/me/activities/tracks/affiliated"
    FAVORITE_TRACK = "/me/favorites/{track_id}"
    FOLLOWING = "/me/followings/{user_id}"


class CatalogParams:
    """Query parameter and header names understood by the remote catalog."""

    CLIENT_ID = "client_id"
    LINKED_PARTITIONING = "linked_partitioning"
    AUTHORIZATION = "Authorization"
    OAUTH_PREFIX = "OAuth"
    LOCATION = "Location"
