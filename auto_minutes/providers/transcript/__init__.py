"""Transcript fetchers."""

from auto_minutes.providers.transcript.meetecho_transcript_provider import (
    MeetechoTranscriptFetcher,
)

__all__ = ["MeetechoTranscriptFetcher"]
