"""
Live streaming domain logic.

Includes:
- stream: Channel live status, playback URLs, archive and identity checks.
"""
