"""
Local runner for the scribe pipeline.

Runs one file through transcription, translation, transliteration and
summarization and prints the results.

Usage
-----
.. code-block:: bash

   voicescribe interview.mp3 --language Hindi
"""

import argparse
import asyncio
import mimetypes
from pathlib import Path

from voicescribe.config import load_config
from voicescribe.dependencies import build_orchestrator
from voicescribe.domain import LANGUAGES, PipelineOrchestrator, RunState, ScribeState
from voicescribe.exceptions import UnsupportedMediaError

EXIT_CODES = {
    RunState.TRANSCRIBE_FAILED: 1,
    RunState.DOWNSTREAM_PARTIAL_FAILURE: 2,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="voicescribe",
        description="Transcribe, translate, transliterate and summarize an audio or video file",
    )
    parser.add_argument("input_file", type=Path, help="Path to an audio or video file")
    parser.add_argument(
        "--language",
        choices=[lang.value for lang in LANGUAGES],
        default=None,
        help="Target language for translation and transliteration",
    )
    parser.add_argument(
        "--mime-type",
        default=None,
        help="Override the MIME type guessed from the file name",
    )
    return parser


def render(state: ScribeState) -> str:
    sections = [
        ("Transcript", state.transcript.value),
        (f"Translation ({state.language})", state.translation.value),
        (f"Transliteration ({state.script})", state.transliteration.value),
        ("Summary", state.summary.value),
    ]
    lines = []
    for title, value in sections:
        lines.append(f"=== {title} ===")
        lines.append(value if value else f"No {title.split(' ')[0].lower()} to display")
        lines.append("")
    for notice in state.notices:
        lines.append(f"!! {notice.title}: {notice.description}")
    return "\n".join(lines).rstrip()


def main(
    argv: list[str] | None = None,
    orchestrator: PipelineOrchestrator | None = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    input_path: Path = args.input_file
    if not input_path.is_file():
        parser.error(f"Input file not found: {input_path}")

    mime_type = args.mime_type or mimetypes.guess_type(input_path.name)[0]

    if orchestrator is None:
        orchestrator = build_orchestrator(load_config(), args.language)
    elif args.language:
        orchestrator.select_language(args.language)

    try:
        source = orchestrator.accept(
            mime_type=mime_type, path=input_path, name=input_path.name
        )
    except UnsupportedMediaError as e:
        parser.error(str(e))

    outcome = asyncio.run(orchestrator.start(source))
    print(render(orchestrator.store.snapshot()))
    return EXIT_CODES.get(outcome.state, 0)


if __name__ == "__main__":
    raise SystemExit(main())
