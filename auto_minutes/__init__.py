"""auto-minutes: meeting minutes from IETF session transcripts.

Collects Meetecho transcripts, generates minutes with an LLM, caches every
result, and assembles a static Markdown site from the cache.
"""

__version__ = "0.1.0"
