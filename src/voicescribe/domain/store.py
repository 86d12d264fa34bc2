"""Single source of truth for what the presentation layer renders."""

import itertools

from voicescribe.domain.models import (
    AITask,
    Notice,
    ResultField,
    ScribeState,
    TaskOutcome,
)
from voicescribe.exceptions import NoticeNotFoundError
from voicescribe.logging import setup_logging

logger = setup_logging()

_FIELD_BY_TASK = {
    AITask.TRANSLATE: "translation",
    AITask.TRANSLITERATE: "transliteration",
    AITask.SUMMARIZE: "summary",
}
_LANGUAGE_BOUND = frozenset({AITask.TRANSLATE, AITask.TRANSLITERATE})

# oldest notices are dropped beyond this many
MAX_NOTICES = 5


class ScribeStore:
    """
    Holds the current ScribeState and applies orchestrator transitions.

    Every mutation replaces the frozen snapshot in one synchronous step, so
    readers on the event loop never observe a half-applied transition.
    Writes tagged with a superseded source (or, for language-bound tasks, a
    language that is no longer selected) are refused and reported as such.
    """

    def __init__(self, language: str):
        self._state = ScribeState(language=language)
        self._notice_ids = itertools.count(1)

    def snapshot(self) -> ScribeState:
        return self._state

    def is_current(self, source_id: int | None) -> bool:
        return source_id is not None and self._state.source_id == source_id

    def accepts(self, source_id: int, language: str, task: AITask) -> bool:
        """Whether a downstream result for this version may still be written."""
        if not self.is_current(source_id) or not self._state.transcript.is_present:
            return False
        if task in _LANGUAGE_BOUND:
            return language == self._state.language
        return True

    def begin_run(self, source_id: int) -> None:
        """Makes source_id current and resets every result."""
        self._state = ScribeState(
            source_id=source_id,
            language=self._state.language,
            transcript=ResultField.pending(),
            transcribing=True,
            notices=self._state.notices,
        )

    def transcript_ready(self, source_id: int, transcript: str) -> bool:
        if not self.is_current(source_id):
            return False
        self._update(
            transcript=ResultField.present(transcript),
            translation=ResultField.pending(),
            transliteration=ResultField.pending(),
            summary=ResultField.pending(),
            transcribing=False,
            post_processing=True,
        )
        return True

    def transcription_failed(
        self, source_id: int, title: str, description: str
    ) -> bool:
        if not self.is_current(source_id):
            return False
        self._update(
            transcript=ResultField(),
            transcribing=False,
            notices=self._with_notice(title, description),
        )
        return True

    def task_settled(self, source_id: int, language: str, outcome: TaskOutcome) -> bool:
        """
        Records one downstream task result as soon as it resolves.

        Returns:
            True if the result was written, False if it was stale.
        """
        if not self.accepts(source_id, language, outcome.task):
            logger.info(
                "Discarded stale result",
                extra={
                    "source_id": source_id,
                    "language": language,
                    "task": outcome.task,
                },
            )
            return False

        name = _FIELD_BY_TASK[outcome.task]
        if outcome.success:
            field = ResultField.present(outcome.text or "")
        elif getattr(self._state, name).is_pending:
            field = ResultField()
        else:
            # a failure never clears a result another fan-out already delivered
            return False

        state = self._state.model_copy(update={name: field})
        self._update(
            **{name: field},
            post_processing=any(f.is_pending for f in state.downstream_fields),
        )
        return True

    def fan_out_settled(
        self,
        source_id: int,
        failed: bool,
        title: str,
        description: str,
    ) -> bool:
        """Closes a fan-out: refreshes post_processing and raises its notice."""
        if not self.is_current(source_id):
            return False
        changes = {
            "post_processing": any(
                field.is_pending for field in self._state.downstream_fields
            )
        }
        if failed:
            changes["notices"] = self._with_notice(title, description)
        self._update(**changes)
        return True

    def language_selected(self, language: str, reissued: tuple[AITask, ...]) -> None:
        changes: dict = {"language": language}
        for task in reissued:
            changes[_FIELD_BY_TASK[task]] = ResultField.pending()
        if reissued:
            changes["post_processing"] = True
        self._update(**changes)

    def dismiss_notice(self, notice_id: int) -> None:
        """
        Removes a notice from display.

        Raises:
            NoticeNotFoundError: If no notice has that id.
        """
        remaining = tuple(n for n in self._state.notices if n.notice_id != notice_id)
        if len(remaining) == len(self._state.notices):
            raise NoticeNotFoundError(notice_id)
        self._update(notices=remaining)

    def _with_notice(self, title: str, description: str) -> tuple[Notice, ...]:
        notice = Notice(
            notice_id=next(self._notice_ids), title=title, description=description
        )
        return (*self._state.notices, notice)[-MAX_NOTICES:]

    def _update(self, **changes) -> None:
        self._state = self._state.model_copy(update=changes)
