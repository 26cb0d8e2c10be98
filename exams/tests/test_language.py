from types import SimpleNamespace

from django.test import SimpleTestCase

from exams.language import (
    ENGLISH, HINDI, localized_option_text, localized_text, participating_sections,
    question_has_content, resolve_questions,
)


def question(text="", text_hi="", explanation="", explanation_hi="", options=()):
    return SimpleNamespace(
        text=text, text_hi=text_hi, explanation=explanation, explanation_hi=explanation_hi,
        options=[SimpleNamespace(option_text=en, option_text_hi=hi) for en, hi in options],
    )


class QuestionContentTest(SimpleTestCase):
    def test_text_explanation_or_any_option_counts(self):
        self.assertTrue(question_has_content(question(text="What?"), ENGLISH))
        self.assertTrue(question_has_content(question(explanation_hi="क्योंकि"), HINDI))
        self.assertTrue(question_has_content(question(options=[("", "हाँ")]), HINDI))
        self.assertFalse(question_has_content(question(text="What?", options=[("Yes", " ")]), HINDI))
        self.assertFalse(question_has_content(question(text="   "), ENGLISH))


class ResolveQuestionsTest(SimpleTestCase):
    def test_requested_language_first(self):
        english_only = question(text="Q1")
        bilingual = question(text="Q2", text_hi="प्र2")

        selection = resolve_questions([english_only, bilingual], HINDI)

        self.assertEqual(selection.language, HINDI)
        self.assertEqual(selection.questions, [bilingual])
        self.assertFalse(selection.fell_back)

    def test_hindi_falls_back_to_english_content(self):
        questions = [question(text="Q1"), question()]

        selection = resolve_questions(questions, HINDI)

        self.assertEqual(selection.language, ENGLISH)
        self.assertEqual(selection.questions, questions[:1])
        self.assertTrue(selection.fell_back)

    def test_no_content_anywhere_serves_everything_in_english(self):
        questions = [question(), question()]

        selection = resolve_questions(questions, ENGLISH)

        self.assertEqual(selection.language, ENGLISH)
        self.assertEqual(selection.questions, questions)
        self.assertTrue(selection.fell_back)

    def test_empty_exam(self):
        self.assertFalse(resolve_questions([], HINDI))


class SectionsAndTextTest(SimpleTestCase):
    def test_untagged_sections_follow_resolved_language(self):
        untagged = SimpleNamespace(language="")
        english = SimpleNamespace(language="en")
        hindi = SimpleNamespace(language="hi")

        self.assertEqual(participating_sections([untagged, english, hindi], HINDI), [untagged, hindi])
        self.assertEqual(participating_sections([untagged, english, hindi], ENGLISH), [untagged, english])

    def test_localized_text_prefers_hindi_when_present(self):
        self.assertEqual(localized_text(question(text="Q", text_hi="प्र"), HINDI), "प्र")
        self.assertEqual(localized_text(question(text="Q"), HINDI), "Q")
        self.assertEqual(localized_text(question(text="Q", text_hi="प्र"), ENGLISH), "Q")
        option = SimpleNamespace(option_text="Yes", option_text_hi="हाँ")
        self.assertEqual(localized_option_text(option, HINDI), "हाँ")
