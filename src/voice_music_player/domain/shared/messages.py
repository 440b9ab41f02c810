"""Centralized message constants for error messages and log templates."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Track Reference Errors
    EMPTY_TRACK_REFERENCE = "Track reference cannot be empty"
    TRACK_NOT_IN_QUEUE = "Could not find track {reference} in the playback state of user {user_id}"

    # Playback State Errors
    POSITION_OUT_OF_RANGE = "Position {position} is out of range for a queue of {length} tracks"
    NEGATIVE_OFFSET = "Playback offset cannot be negative"
    CATALOG_EXHAUSTED = "The catalog has no further pages for this session"
    NO_PLAYBACK_STATE = "User '{user_id}' has no playback session"

    # Continuation Errors
    MISSING_AUTH_TOKEN = "Cannot continue the activity stream of user {user_id} without an auth token"
    CONTINUATION_RACE = "Playback session of user {user_id} changed while fetching a continuation page"

    # Remote Catalog Errors
    REMOTE_REQUEST_FAILED = "Catalog request to {url} failed: {reason}"
    REMOTE_BAD_STATUS = "Catalog request to {url} returned HTTP {status}"
    REMOTE_BAD_PAYLOAD = "Catalog response from {url} could not be decoded"
    TRACK_NOT_STREAMABLE = "Track {reference} is not streamable (HTTP {status})"
    STREAM_URL_MISSING = "Track {reference} has no stream URL"

    # Settings Errors
    INVALID_DATABASE_URL = "Database URL must start with sqlite://"
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Database Lifecycle
    DATABASE_INITIALIZED = "Database initialized at %s"
    DATABASE_CLOSED = "Database manager closed"

    # Session Store
    SESSION_SAVED = "Saved playback session for user %s (%d tracks, position %d)"
    SESSION_POSITION_UPDATED = "Updated position of user %s to %d"
    SESSION_OFFSET_UPDATED = "Remembered offset %d ms at position %d for user %s"
    SESSION_LOOP_UPDATED = "Set looping=%s for user %s"
    SESSION_SHUFFLE_UPDATED = "Set shuffle=%s for user %s"
    SESSION_CONDITIONAL_WRITE_LOST = "Conditional write lost for user %s (expected cursor %s, %d tracks)"

    # Engine
    SESSION_STARTED = "Started %s session for user %s with %d tracks (more pages: %s)"
    NAVIGATION_RESULT = "Navigation for user %s: %s -> %s"
    CONTINUATION_FETCHING = "Fetching continuation page for user %s in %s mode"
    CONTINUATION_APPENDED = "Appended %d tracks for user %s (more pages: %s)"
    CONTINUATION_EMPTY = "Continuation page for user %s contained no tracks (more pages: %s)"
    CONTINUATION_FAILED = "Continuation fetch failed for user %s: %r"
    POSITION_TRACK_MISSING = "Track %s is not in the queue of user %s"

    # Remote Catalog
    CATALOG_CLIENT_CREATED = "Catalog HTTP client created for %s (timeout %.1fs)"
    CATALOG_CLIENT_CLOSED = "Catalog HTTP client closed"
    CATALOG_REQUEST = "%s %s"
    CATALOG_UNKNOWN_ACTIVITY = "No activity of type %s registered, dropping entry"
    CATALOG_INVALID_ACTIVITY = "Dropping activity entry of type %s that failed validation: %s"
    CATALOG_INVALID_TRACK = "Dropping track %s that failed validation: %s"
    CATALOG_STREAM_REDIRECT = "Resolved stream URL for %s"
    CATALOG_TRACK_LIKED = "Liked track %s"
    CATALOG_USER_FOLLOWED = "Followed catalog user %s"
    CATALOG_ALREADY_FOLLOWING = "Catalog user %s is already followed"

    # Start Commands
    START_NO_TRACKS = "No tracks available to start %s playback for user %s"

    # Feedback Commands
    FOLLOW_NO_UPLOADER = "Track %s has no uploader to follow (user %s)"

    # Entry Point
    CLI_STARTING = "Running '%s' for user %s (environment: %s)"
    CLI_DOMAIN_ERROR = "Command failed: %s (%s)"
    CLI_FATAL_ERROR = "Fatal error: %s"
