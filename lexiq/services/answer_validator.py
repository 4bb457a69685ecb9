"""
Answer validation per exercise variant.

Stateless: every function only looks at the exercise and the raw answer.
"""
import logging
from typing import Callable, Dict, Optional

from lexiq.core.helpers.similarity import similarity_ratio
from lexiq.models.exercise import (
    Exercise,
    ExerciseType,
    FillInBlankExercise,
    ListeningExercise,
    MultipleChoiceExercise,
    TranslationExercise,
)

logger = logging.getLogger(__name__)


def _normalize(text: Optional[str], trim: bool, case_sensitive: bool) -> str:
    text = text or ""
    if trim:
        text = text.strip()
    if not case_sensitive:
        text = text.lower()
    return text


def _matches_text(
    answer: str,
    correct_answer: Optional[str],
    accepted_answers: Optional[str],
    trim: bool,
    case_sensitive: bool,
) -> bool:
    user_input = _normalize(answer, trim, case_sensitive)
    if user_input == _normalize(correct_answer, trim, case_sensitive):
        return True

    if accepted_answers:
        alternatives = {
            _normalize(alt, trim, case_sensitive) for alt in accepted_answers.split(",")
        }
        return user_input in alternatives

    return False


def validate_multiple_choice(exercise: MultipleChoiceExercise, answer: str) -> bool:
    selected = next((o for o in exercise.options if str(o.id) == answer.strip()), None)
    return bool(selected is not None and selected.is_correct)


def validate_fill_in_blank(exercise: FillInBlankExercise, answer: str) -> bool:
    return _matches_text(
        answer,
        exercise.correct_answer,
        exercise.accepted_answers,
        trim=bool(exercise.trim_whitespace),
        case_sensitive=bool(exercise.case_sensitive),
    )


def validate_listening(exercise: ListeningExercise, answer: str) -> bool:
    return _matches_text(
        answer,
        exercise.correct_answer,
        exercise.accepted_answers,
        trim=True,
        case_sensitive=bool(exercise.case_sensitive),
    )


def validate_translation(exercise: TranslationExercise, answer: str) -> bool:
    # Language codes are not used for normalization.
    user_input = _normalize(answer, trim=True, case_sensitive=False)
    target = _normalize(exercise.target_text, trim=True, case_sensitive=False)

    if not user_input and not target:
        return True

    similarity = similarity_ratio(user_input, target)
    logger.debug(f"Translation similarity for exercise {exercise.id}: {similarity:.3f}")
    return similarity >= (exercise.matching_threshold or 0.0)


_VALIDATORS: Dict[ExerciseType, Callable[..., bool]] = {
    ExerciseType.MULTIPLE_CHOICE: validate_multiple_choice,
    ExerciseType.FILL_IN_BLANK: validate_fill_in_blank,
    ExerciseType.LISTENING: validate_listening,
    ExerciseType.TRANSLATION: validate_translation,
}

_missing = set(ExerciseType) - set(_VALIDATORS)
if _missing:
    raise RuntimeError(f"No answer validator registered for: {sorted(t.value for t in _missing)}")


def validate_answer(exercise: Exercise, answer: str) -> bool:
    """
    Check whether ``answer`` is correct for ``exercise``.

    Args:
        exercise: Loaded exercise (concrete variant subclass)
        answer: Raw answer as submitted

    Returns:
        True if correct. An incorrect answer is a normal outcome, not an error.
    """
    return _VALIDATORS[exercise.kind](exercise, answer or "")


def correct_answer_for(exercise: Exercise) -> Optional[str]:
    """Answer text revealed to the learner after a wrong submission."""
    if exercise.kind is ExerciseType.MULTIPLE_CHOICE:
        correct = next((o for o in exercise.options if o.is_correct), None)
        return correct.option_text if correct else None
    if exercise.kind is ExerciseType.TRANSLATION:
        return exercise.target_text
    return exercise.correct_answer
