"""Domain dataclasses and API schemas."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


@dataclass
class WordRecord:
    """Assembled result of a word lookup."""

    word: str  # Always lowercase
    language_code: str
    pronunciation: str = ""
    meaning: str = ""
    example: str = ""  # Real sentence or the language sentinel, never None

    def to_response(self) -> dict[str, str]:
        return {
            "word": self.word,
            "ipa": self.pronunciation,
            "meaning": self.meaning,
            "example": self.example,
            "language": self.language_code,
        }


@dataclass
class ImageCandidate:
    """An image suggestion for a word."""

    id: str
    preview_url: str
    full_url: str
    is_placeholder: bool = False

    def to_response(self) -> dict[str, str]:
        return {
            "id": self.id,
            "previewURL": self.preview_url,
            "fullURL": self.full_url,
        }


@dataclass
class DictionaryEntry:
    """Primary lookup result from a dictionary backend."""

    word: str
    ipa: str | None = None
    meaning: str | None = None
    example: str | None = None
    source: str = ""  # "dictionaryapi", "wiktionary-es", ...
    url: str | None = None

    @property
    def is_empty(self) -> bool:
        return not (self.ipa or self.meaning or self.example)


class SourceStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True)
class SourceResult:
    """Outcome of a single source adapter call.

    Absence and transport failures are both values, never exceptions;
    ``detail`` keeps the failure reason for logging.
    """

    status: SourceStatus
    text: str | None = None
    detail: str | None = None
    source: str = ""

    @property
    def found(self) -> bool:
        return self.status is SourceStatus.FOUND and bool(self.text)

    @classmethod
    def hit(cls, text: str, source: str = "") -> "SourceResult":
        return cls(SourceStatus.FOUND, text=text, source=source)

    @classmethod
    def miss(cls, source: str = "") -> "SourceResult":
        return cls(SourceStatus.NOT_FOUND, source=source)

    @classmethod
    def failure(cls, detail: str, source: str = "") -> "SourceResult":
        return cls(SourceStatus.TRANSPORT_ERROR, detail=detail, source=source)


# API schemas


class SearchResponse(BaseModel):
    word: str
    ipa: str
    meaning: str
    example: str
    language: str


class ImageResponse(BaseModel):
    id: str
    previewURL: str  # noqa: N815
    fullURL: str  # noqa: N815


class ImagesResponse(BaseModel):
    images: list[ImageResponse]


class SaveImageRequest(BaseModel):
    url: str


class SaveImageResponse(BaseModel):
    filename: str


class AnkiProxyRequest(BaseModel):
    """Body forwarded verbatim to AnkiConnect."""

    action: str
    version: int = 6
    params: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    error: str
