# exams/language.py
"""
Bilingual content selection.

Every attempt fixes one language. Questions are served and graded in that
language when they have authored content for it, otherwise the primary
(English) variant is used. Sections carry a language tag; untagged sections
follow whichever language was resolved for the attempt.
"""
from dataclasses import dataclass, field
from typing import List

ENGLISH = "en"
HINDI = "hi"
SUPPORTED_LANGUAGES = (ENGLISH, HINDI)


def _has_text(value) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _options_of(question):
    options = getattr(question, "options", None)
    if options is None:
        return []
    # ORM related manager or a plain list
    if hasattr(options, "all"):
        return list(options.all())
    return list(options)


def option_has_content(option, language: str) -> bool:
    if language == HINDI:
        return _has_text(option.option_text_hi)
    return _has_text(option.option_text)


def question_has_content(question, language: str) -> bool:
    """A question has content when its text, explanation or any option text is non-blank."""
    if language == HINDI:
        own = _has_text(question.text_hi) or _has_text(question.explanation_hi)
    else:
        own = _has_text(question.text) or _has_text(question.explanation)
    if own:
        return True
    return any(option_has_content(opt, language) for opt in _options_of(question))


@dataclass
class LanguageSelection:
    language: str
    questions: List = field(default_factory=list)
    fell_back: bool = False

    def __bool__(self):
        return bool(self.questions)


def resolve_questions(questions, language: str) -> LanguageSelection:
    """
    Three-tier fallback:
      1. questions with content in the requested language
      2. for Hindi, questions with English content
      3. the whole set, served in English
    """
    questions = list(questions)
    selected = [q for q in questions if question_has_content(q, language)]
    if selected:
        return LanguageSelection(language=language, questions=selected)

    if language == HINDI:
        selected = [q for q in questions if question_has_content(q, ENGLISH)]
        if selected:
            return LanguageSelection(language=ENGLISH, questions=selected, fell_back=True)

    return LanguageSelection(language=ENGLISH, questions=questions, fell_back=True)


def section_language(section, default: str) -> str:
    return section.language or default


def participating_sections(sections, language: str):
    """Sections whose tag (or the resolved language when untagged) matches."""
    return [s for s in sections if section_language(s, language) == language]


def _pick(primary, secondary, language):
    if language == HINDI and _has_text(secondary):
        return secondary
    return primary


def localized_text(question, language: str):
    return _pick(question.text, question.text_hi, language)


def localized_explanation(question, language: str):
    return _pick(question.explanation, question.explanation_hi, language)


def localized_option_text(option, language: str):
    return _pick(option.option_text, option.option_text_hi, language)


def localized_section_name(section, language: str):
    return _pick(section.name, section.name_hi, language)
