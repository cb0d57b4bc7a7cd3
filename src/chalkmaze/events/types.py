class EventType:
    """Centralized event names published by the maze session."""

    # A new level grid, collision world and marker pools are in place
    LEVEL_STARTED = "level.started"

    # The agent reached the exit; the next level follows immediately
    LEVEL_COMPLETED = "level.completed"

    # A floor or wall marker was recorded
    MARKER_PLACED = "marker.placed"

    # A path hint became visible or expired
    HINT_REVEALED = "hint.revealed"
    HINT_EXPIRED = "hint.expired"

    # Debug-only teleport next to the exit
    AGENT_TELEPORTED = "agent.teleported"

    # Short-lived user-facing message for a failed action
    NOTICE = "notice"
