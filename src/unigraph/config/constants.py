DEFAULTS = {
    # Conflict policy used when compose() gets no options (keep_first | keep_last | merge | fail)
    "COMPOSE_CONFLICT_RESOLUTION": "fail",
    # Reject composed edges whose endpoints did not survive the merge
    "COMPOSE_VALIDATE_EDGES": True,
    # Display name given to composed graphs
    "COMPOSE_DEFAULT_NAME": "Composed Graph",
    # Carry the source graph's metadata attributes into transformed graphs
    "TRANSFORM_PRESERVE_UNMAPPED_METADATA": True,
}
