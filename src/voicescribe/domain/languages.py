"""Target language catalog and script lookup."""

from pydantic import BaseModel

DEFAULT_SCRIPT = "Latin"


class TargetLanguage(BaseModel, frozen=True):
    """A selectable output language paired with its writing script."""

    value: str
    label: str
    script: str


LANGUAGES: tuple[TargetLanguage, ...] = (
    TargetLanguage(value="English", label="English", script="Latin"),
    TargetLanguage(value="Hindi", label="Hindi", script="Devanagari"),
    TargetLanguage(value="Marathi", label="Marathi", script="Devanagari"),
    TargetLanguage(value="Tamil", label="Tamil", script="Tamil"),
    TargetLanguage(value="Telugu", label="Telugu", script="Telugu"),
    TargetLanguage(value="Kannada", label="Kannada", script="Kannada"),
)


def find_language(value: str) -> TargetLanguage | None:
    return next((lang for lang in LANGUAGES if lang.value == value), None)


def script_for(value: str) -> str:
    """Returns the catalog script for a language, Latin when it is not listed."""
    language = find_language(value)
    return language.script if language else DEFAULT_SCRIPT
