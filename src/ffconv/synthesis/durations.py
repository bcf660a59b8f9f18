"""Duration arithmetic shared by rate control and progress tracking."""

from ffconv.domain import TranscodeOptions


def effective_clip_duration(options: TranscodeOptions, known_duration: float) -> float:
    """Length of source material that will be encoded.

    The trimmed range when a valid trim end is set, otherwise the known
    source duration (which may be 0 when unknown).

    Args:
        options: Transcode options.
        known_duration: Probed source duration in seconds (0 = unknown).

    Returns:
        Duration in seconds.
    """
    clip = options.clip_duration_seconds
    if clip is not None:
        return clip
    return known_duration


def expected_output_duration(options: TranscodeOptions, known_duration: float) -> float:
    """Playback length of the produced file.

    Speed changes rescale timestamps, so a 60 s clip at 2x plays for 30 s.
    A start trim without an end shortens the remainder of a known source.
    Returns 0 when the clip length is unknown.
    """
    clip = effective_clip_duration(options, known_duration)
    if options.clip_duration_seconds is None and options.trim_start_seconds > 0:
        clip -= options.trim_start_seconds
    if clip <= 0:
        return 0.0
    if options.changes_speed:
        return clip / options.speed_factor
    return clip
