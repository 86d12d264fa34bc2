"""Request and response models for the scribe API."""

from pydantic import BaseModel

from voicescribe.domain import MediaKind


class SourceAccepted(BaseModel):
    """Response returned once a source has been accepted for processing."""

    message: str
    source_id: int
    kind: MediaKind


class LanguageSelection(BaseModel):
    """Body of a language change request."""

    language: str


class RecordingStatus(BaseModel):
    """State of the capture device after a recording command."""

    recording: bool
    captured_bytes: int = 0
