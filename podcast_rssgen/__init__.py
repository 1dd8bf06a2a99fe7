"""Generate podcast RSS feeds from a directory of audio files."""
