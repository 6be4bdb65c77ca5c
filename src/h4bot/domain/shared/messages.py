"""Centralized message constants for error messages, validation, and user feedback."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Discord ID Validation Errors
    INVALID_SNOWFLAKE = "Discord snowflake ID must be positive"
    SNOWFLAKE_TOO_LARGE = "Discord snowflake ID exceeds maximum value (2^64)"

    # Track Validation Errors
    EMPTY_TRACK_ID = "Track ID cannot be empty"

    # Nickname Validation Errors
    EMPTY_LABEL_LIST = "At least one nickname label is required"
    LABEL_TOO_LONG = "Nickname label '{label}' exceeds 32 characters"

    # Time/Date Validation Errors
    TIMEZONE_REQUIRED_UTC_DATETIME = "UtcDateTime requires a timezone-aware datetime"

    # Field Validation Errors (templates)
    FIELD_CANNOT_BE_EMPTY = "{field_name} cannot be empty"
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"

    # Audio/Stream Errors
    RESOLVER_RETURNED_NONE = "Resolver returned None"

    # Authentication/Security Errors
    DISCORD_TOKEN_REQUIRED = "DISCORD_TOKEN environment variable is required"
    BOT_NOT_INITIALIZED = "Bot not initialized. Call set_bot() first."
    CONTAINER_NOT_FOUND = "Container not found on bot instance"


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Voice Connection
    GUILD_NOT_FOUND = "Guild %s not found"
    CHANNEL_NOT_VOICE = "Channel %s is not a voice channel"
    VOICE_CONNECTED = "Connected to voice channel %s in %s"
    VOICE_DISCONNECTED = "Disconnected from voice in guild %s"
    VOICE_CONNECTION_TIMEOUT = "Timeout connecting to channel %s"
    VOICE_NO_PERMISSION = "No permission to connect to channel %s"
    VOICE_CLIENT_ERROR = "Client error connecting: %r"
    VOICE_STALE_CLEANUP = "Found stale voice client in guild %s, cleaning up"
    VOICE_NOT_CONNECTED = "Not connected to voice in guild %s"

    # Playback
    TRACK_ENDED = "Track ended in guild %s (error=%s)"
    PLAYBACK_STARTED = "Started playing '%s' in guild %s"
    PLAYBACK_STOPPED = "Stopped playback in guild %s"
    PLAYBACK_ERROR = "Playback error in guild %s: %s"
    PLAYBACK_FAILED_START = "Failed to start playback: %s"
    PLAYBACK_NO_CALLBACK = "No track end callback set for guild %s"
    PLAYBACK_CALLING_CALLBACK = "Calling track end callback for guild %s"
    PLAYBACK_CALLBACK_ERROR = "Error in track end callback for guild %s: %s"
    PLAYBACK_IGNORING_CALLBACK = "Ignoring voice track-end callback for guild %s"

    # Queue
    QUEUE_REQUEST_PLAY = "Play requested in guild %s by %s: %s"
    QUEUE_TRACK_APPENDED = "Queued '%s' in guild %s at position %s"
    QUEUE_TRACK_ROLLED_BACK = "Transport refused '%s' in guild %s; queue rolled back"
    QUEUE_ADVANCED = "Advanced queue in guild %s, next: %s"
    QUEUE_EXHAUSTED = "Queue exhausted in guild %s"
    QUEUE_CLEARED = "Cleared %s track(s) in guild %s"
    SESSION_CREATED = "Voice session created in guild %s (channel %s)"
    SESSION_DELETED = "Voice session deleted in guild %s"
    SESSION_STALE_DROPPED = "Dropped voice session in guild %s (channel %s); voice connection is gone"
    SESSION_REBOUND = "Voice session in guild %s moved from channel %s to %s"

    # Nickname batches
    BATCH_STARTED = "Rename batch in guild %s: policy=%s candidates=%s selected=%s"
    BATCH_FINISHED = "Rename batch in guild %s finished: succeeded=%s skipped=%s failed=%s"
    BATCH_CANCELLED = "Rename batch in guild %s cancelled; %s worker(s) left to finish"
    BATCH_ORPHANS_DRAINED = "Drained %s orphaned rename batch(es)"
    MEMBER_SKIPPED = "Skipped protected member %s in guild %s"
    MEMBER_RENAMED = "Renamed member %s in guild %s to %r"
    MEMBER_RENAME_FAILED = "Could not rename member %s in guild %s: %s"
    MEMBER_LIST_FAILED = "Could not list members of guild %s: %s"
    POOL_EXHAUSTED = "Label pool exhausted, using fallback %r"

    # yt-dlp
    YTDLP_NO_URL_IN_INFO_DICT = "No URL found in info dict"
    YTDLP_NO_STREAM_URL = "No stream URL found for %s"
    YTDLP_FAILED_EXTRACT_INFO = "Failed to extract info from %s"

    # Platform status
    STATUS_FETCHED = "Fetched platform status: %s"
    STATUS_FETCH_FAILED = "Failed to fetch platform status: %s"
    WEEK_FETCHED = "Fetched current week: %s"
    WEEK_FETCH_FAILED = "Failed to fetch current week: %s"

    # Commands
    COMMAND_COMPLETED = "Processed command '%s' (invocations=%s)"
    COMMAND_RATE_LIMITED = "Command '%s' rate-limited for %s, retry in %.1fs"

    # Bot Lifecycle
    BOT_STARTING = "Starting h4bot in {environment} mode"
    BOT_CONFIG_SUMMARY = "Nicknames: %s label(s), %s protected id(s), concurrency=%s; command sync: %s"
    BOT_INVALID_SETTINGS = "Invalid settings, refusing to start: %s"
    LOGGING_CONFIG_FALLBACK = "Could not load logging config %s (%s), falling back to basic config"
    BOT_SETUP = "Setting up bot..."
    BOT_CONTAINER_INITIALIZED = "Container initialized successfully"
    BOT_CONTAINER_INIT_FAILED = "Failed to initialize container: %s"
    BOT_SETUP_COMPLETE = "Bot setup complete"
    BOT_STARTING_RUN = "Starting bot..."
    BOT_STOPPED = "Bot stopped successfully"
    BOT_KEYBOARD_INTERRUPT = "Received keyboard interrupt, shutting down..."
    BOT_FATAL_ERROR = "Fatal error: %s"
    BOT_SHUTTING_DOWN = "Shutting down bot..."
    BOT_CONTAINER_SHUTDOWN = "Container shutdown complete"
    BOT_CONTAINER_SHUTDOWN_ERROR = "Error during container shutdown: %s"
    BOT_SHUTDOWN_COMPLETE = "Bot shutdown complete"
    BOT_SHUTDOWN_TIMEOUT = "Shutdown did not finish within %ss"
    BOT_READY = "Bot ready as %s (%s)"
    BOT_CONNECTED_GUILDS = "Connected to %s guilds"

    # Cog Loading
    BOT_COG_LOADED = "Loaded cog: %s"
    BOT_COG_LOAD_FAILED = "Failed to load cog %s: %s"
    BOT_COGS_LOADED_SUMMARY = "Cogs loaded: %s success, %s failed"

    # Command Sync
    BOT_SYNCED_GUILD = "Synced %s commands to guild %s"
    BOT_SYNC_GUILD_FAILED = "Failed to sync to guild %s: %s"
    BOT_SYNCED_GLOBAL = "Synced %s commands globally"
    BOT_SYNC_GLOBAL_FAILED = "Failed to sync commands globally: %s"
    BOT_SYNC_ON_STARTUP_FAILED = "Failed to sync commands on startup: %s"

    # Error Handling
    BOT_SLASH_COMMAND_ERROR = "Slash command error in '%s': %s"
    BOT_ERROR_MESSAGE_SEND_FAILED = "Failed to send error message to user"
    VOICE_LEAVE_FAILED = "Failed to leave voice in guild %s: %r"


class DiscordUIMessages:
    """User-facing reply text."""

    MENTION_USER = "<@{user_id}>"

    # Fun
    SUCCESS_HELLO = "Hi!"
    SUCCESS_RENAMED = "Successfully ballsed: {mentions}"
    RENAME_SUMMARY_SKIPPED = "Skipped {count} protected member(s)."
    RENAME_SUMMARY_FAILED = "Could not rename {count} member(s)."
    STATE_NOBODY_TO_RENAME = "Nobody to balls."
    STATE_INVALID_TARGET = "Invalid user.., picking random."

    # Latency
    SUCCESS_PONG = "{emoji} Pong! {latency_ms}ms"
    SUCCESS_SHARD_PONG = "Pong! Shard {shard_id}: {latency_ms}ms"
    STATE_NO_SHARD = "No shard found"
    EMBED_STATUS_TITLE = "Response from {page_name}"
    EMBED_STATUS_DESCRIPTION = "Discord responds with {description}"
    ERROR_STATUS_UNAVAILABLE = "Could not reach Discord status right now."
    EMBED_WEEK_TITLE = "The current week is {week}"
    ERROR_WEEK_UNAVAILABLE = "Could not look up the current week right now."

    # Music
    SUCCESS_JOINED = "Joined channel {channel}"
    SUCCESS_LEFT = "Left the voice channel"
    SUCCESS_NOW_PLAYING = "Now playing: **{title}**"
    SUCCESS_QUEUED = "Queued **{title}** at position {position}"
    SUCCESS_STOPPED = "Stopped playback and cleared {count} track(s)"
    SUCCESS_SKIPPED = "Skipped **{title}**"
    STATE_ALREADY_JOINED = "Already in {channel}"
    STATE_NOTHING_PLAYING = "Nothing is playing."
    STATE_QUEUE_EMPTY = "Queue is empty."
    STATE_NOT_CONNECTED_TO_VOICE = "Not connected to a voice channel."
    STATE_NEED_TO_BE_IN_VOICE = "You're not in a voice channel!"
    STATE_CHANNEL_MISMATCH = "I'm already playing in another voice channel."
    STATE_SERVER_ONLY = "This command can only be used in a server."
    STATE_VERIFY_VOICE_FAILED = "Could not verify your voice state."
    ERROR_INVALID_SOURCE = "Must provide a valid URL to a video or audio"
    ERROR_TRACK_NOT_FOUND = "Couldn't find a track for: {query}"
    ERROR_COULD_NOT_JOIN_VOICE = "I couldn't join your voice channel."
    EMBED_QUEUE = "Queue ({total_tracks} track(s))"
    EMBED_NOW_PLAYING = "Now Playing"

    # Generic
    ERROR_OCCURRED = "An error occurred: {error}"
    ERROR_COMMAND_COOLDOWN = "Try this again in {seconds:.0f} seconds."


class EmojiConstants:
    """Emoji used in replies."""

    ERROR = "❌"
    MUSIC = "🎵"
    LATENCY_OK = "🟢"
    LATENCY_WARN = "🟠"
    LATENCY_BAD = "🔴"
