from __future__ import annotations

from typing import Optional, Sequence

from app.modules.conjugation.models import BLANK_MARKER, TenseId
from app.modules.conjugation.tenses import TENSE_NAMES


def _tense_reference() -> str:
    return "\n".join(f"- {tid.value}: {name}" for tid, name in TENSE_NAMES.items())


SYSTEM_PROMPT = (
    "You are a Spanish language exercise generator. Generate fill-in-the-blank "
    "verb conjugation questions as valid JSON.\n\n"
    "## Tense keys\n"
    f"{_tense_reference()}\n\n"
    "## Rules\n"
    "1. Distribute questions evenly across the requested tenses.\n"
    "2. Vary subject pronouns (yo, tú, él/ella/usted, nosotros/as, vosotros/as, ellos/ellas/ustedes).\n"
    "3. Mix regular and irregular verbs in practical, everyday contexts.\n"
    f'4. Replace the conjugated verb with "{BLANK_MARKER}" (double underscore) exactly once in the Spanish sentence.\n'
    "5. Add time markers or context clues where they help (e.g. \"ayer\" for the preterite).\n"
    "6. The answer is only the conjugated verb; for compound tenses include the auxiliary "
    '(e.g. "hemos visitado").\n'
    "7. Provide accurate English and French translations.\n\n"
    "## Output format\n"
    "Return ONLY a JSON array, with no markdown and no commentary. Each element is an "
    "object with exactly these fields:\n"
    f'- es: Spanish sentence containing "{BLANK_MARKER}"\n'
    "- en: English translation\n"
    "- fr: French translation\n"
    "- answer: the correctly conjugated verb, lowercase\n"
    "- tense: one of the tense keys above\n"
    "- inf: the infinitive of the verb\n\n"
    "## Example\n"
    '[{"es": "Ayer yo __ pan.", "en": "Yesterday I bought bread.", '
    '"fr": "Hier, j\'ai acheté du pain.", "answer": "compré", "tense": "pret", "inf": "comprar"}]'
)


def build_user_directive(count: int, tenses: Optional[Sequence[TenseId]] = None) -> str:
    if tenses:
        keys = ",".join(TenseId(t).value for t in tenses)
        return f"Generate a total of {int(count)} questions spread across the {keys} tenses"
    return f"Generate {int(count)} questions spread across all of the tenses"


def build_instruction(count: int, tenses: Optional[Sequence[TenseId]] = None) -> str:
    """Single-input prompt: fixed template followed by the request line."""
    return SYSTEM_PROMPT + "\n\n" + build_user_directive(count, tenses)
