"""
Tests for answer validation

Tests cover:
- Multiple choice option ids
- Fill in blank and listening normalization
- Translation similarity thresholds
- Correct answer reveal text
"""

import pytest

from lexiq.core.helpers.similarity import levenshtein_distance, similarity_ratio
from lexiq.models.exercise import (
    ExerciseOption,
    ExerciseType,
    FillInBlankExercise,
    ListeningExercise,
    MultipleChoiceExercise,
    TranslationExercise,
)
from lexiq.services.answer_validator import correct_answer_for, validate_answer


@pytest.fixture
def multiple_choice():
    return MultipleChoiceExercise(
        id=1,
        title="How do you say 'hello'?",
        points=10,
        options=[
            ExerciseOption(id=11, option_text="Ciao", is_correct=True, order_index=0),
            ExerciseOption(id=12, option_text="Grazie", is_correct=False, order_index=1),
        ],
    )


@pytest.fixture
def fill_in_blank():
    return FillInBlankExercise(
        id=2,
        title="Mi ___ Marco",
        points=10,
        correct_answer="chiamo",
        case_sensitive=False,
        trim_whitespace=True,
    )


@pytest.fixture
def translation():
    return TranslationExercise(
        id=3,
        title="Translate 'Good evening'",
        points=15,
        source_text="Good evening",
        target_text="Buonasera",
        source_lang="en",
        target_lang="it",
        matching_threshold=0.85,
    )


class TestExerciseKind:
    def test_subclasses_carry_their_discriminator(self, multiple_choice, fill_in_blank, translation):
        assert multiple_choice.kind is ExerciseType.MULTIPLE_CHOICE
        assert fill_in_blank.kind is ExerciseType.FILL_IN_BLANK
        assert translation.kind is ExerciseType.TRANSLATION
        assert ListeningExercise(title="x", correct_answer="y").kind is ExerciseType.LISTENING


class TestMultipleChoice:
    def test_correct_option_id(self, multiple_choice):
        assert validate_answer(multiple_choice, "11") is True

    def test_option_id_is_trimmed(self, multiple_choice):
        assert validate_answer(multiple_choice, " 11 ") is True

    def test_wrong_option_id(self, multiple_choice):
        assert validate_answer(multiple_choice, "12") is False

    @pytest.mark.parametrize("answer", ["999", "abc", "", "Ciao"])
    def test_unknown_or_garbage_answers_are_incorrect(self, multiple_choice, answer):
        """Garbage never raises, it is just an incorrect answer."""
        assert validate_answer(multiple_choice, answer) is False


class TestFillInBlank:
    def test_trimmed_and_case_insensitive_match(self, fill_in_blank):
        """' Chiamo ' matches 'chiamo' with trimming and case folding."""
        assert validate_answer(fill_in_blank, " Chiamo ") is True

    def test_wrong_answer(self, fill_in_blank):
        assert validate_answer(fill_in_blank, "xyz") is False

    def test_case_sensitive_rejects_other_case(self, fill_in_blank):
        fill_in_blank.case_sensitive = True
        assert validate_answer(fill_in_blank, "Chiamo") is False
        assert validate_answer(fill_in_blank, "chiamo") is True

    def test_without_trimming_whitespace_matters(self, fill_in_blank):
        fill_in_blank.trim_whitespace = False
        assert validate_answer(fill_in_blank, " chiamo") is False

    def test_accepted_answers_are_normalized(self, fill_in_blank):
        fill_in_blank.accepted_answers = "Chiamo io, mi chiamo"
        assert validate_answer(fill_in_blank, "MI CHIAMO") is True
        assert validate_answer(fill_in_blank, "chiamo io") is True
        assert validate_answer(fill_in_blank, "chiami") is False


class TestListening:
    def test_always_trims(self):
        exercise = ListeningExercise(
            title="Listen",
            correct_answer="Buongiorno",
            accepted_answers="buon giorno",
            case_sensitive=False,
            trim_whitespace=False,
        )
        assert validate_answer(exercise, "  buongiorno  ") is True
        assert validate_answer(exercise, " Buon Giorno") is True
        assert validate_answer(exercise, "buonasera") is False


class TestTranslation:
    def test_exact_match(self, translation):
        assert validate_answer(translation, "buonasera") is True

    def test_one_missing_character_passes(self, translation):
        """'buonaser' has similarity 8/9, above the 0.85 threshold."""
        assert similarity_ratio("buonaser", "buonasera") == pytest.approx(8 / 9)
        assert validate_answer(translation, "buonaser") is True

    def test_far_answer_fails(self, translation):
        assert validate_answer(translation, "bona") is False

    def test_both_empty_is_correct(self, translation):
        translation.target_text = ""
        assert validate_answer(translation, "   ") is True

    def test_threshold_is_inclusive(self, translation):
        translation.matching_threshold = 8 / 9
        assert validate_answer(translation, "buonaser") is True

    def test_language_codes_are_ignored(self, translation):
        translation.target_lang = "xx"
        assert validate_answer(translation, "Buonasera ") is True


class TestSimilarity:
    def test_levenshtein_distance(self):
        assert levenshtein_distance("kitten", "sitting") == 3
        assert levenshtein_distance("", "abc") == 3
        assert levenshtein_distance("same", "same") == 0

    def test_equal_length_one_substitution(self):
        """Equal length strings differing in one character have similarity (n-1)/n."""
        assert similarity_ratio("gatto", "gatti") == pytest.approx(4 / 5)

    def test_empty_strings_are_identical(self):
        assert similarity_ratio("", "") == 1.0


class TestCorrectAnswerFor:
    def test_multiple_choice_reveals_option_text(self, multiple_choice):
        assert correct_answer_for(multiple_choice) == "Ciao"

    def test_fill_in_blank_reveals_correct_answer(self, fill_in_blank):
        assert correct_answer_for(fill_in_blank) == "chiamo"

    def test_translation_reveals_target_text(self, translation):
        assert correct_answer_for(translation) == "Buonasera"
