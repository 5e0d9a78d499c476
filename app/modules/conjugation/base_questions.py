"""Built-in questions served before any set has been generated or loaded."""

from __future__ import annotations

from app.modules.conjugation.models import Question

_RAW: list[dict[str, str]] = [
    {"es": "Yo __ español todos los días.", "en": "I speak Spanish every day.", "fr": "Je parle espagnol tous les jours.", "answer": "hablo", "tense": "pres", "inf": "hablar"},
    {"es": "Nosotros __ en Madrid.", "en": "We live in Madrid.", "fr": "Nous habitons à Madrid.", "answer": "vivimos", "tense": "pres", "inf": "vivir"},
    {"es": "Ayer yo __ pan.", "en": "Yesterday I bought bread.", "fr": "Hier, j'ai acheté du pain.", "answer": "compré", "tense": "pret", "inf": "comprar"},
    {"es": "¿__ a tiempo anoche?", "en": "Did you arrive on time last night?", "fr": "Es-tu arrivé à l'heure hier soir ?", "answer": "llegaste", "tense": "pret", "inf": "llegar"},
    {"es": "Nosotros __ mucho cuando éramos niños.", "en": "We used to play a lot when we were children.", "fr": "Nous jouions beaucoup quand nous étions enfants.", "answer": "jugábamos", "tense": "imp", "inf": "jugar"},
    {"es": "Ellos __ mañana.", "en": "They will arrive tomorrow.", "fr": "Ils arriveront demain.", "answer": "llegarán", "tense": "fut", "inf": "llegar"},
    {"es": "¿__ ayudarme con la maleta?", "en": "Could you help me with the suitcase?", "fr": "Pourrais-tu m'aider avec la valise ?", "answer": "podrías", "tense": "cond", "inf": "poder"},
    {"es": "Nosotros __ a mis abuelos esta semana.", "en": "We have visited my grandparents this week.", "fr": "Nous avons rendu visite à mes grands-parents cette semaine.", "answer": "hemos visitado", "tense": "presperf", "inf": "visitar"},
    {"es": "Cuando llegaste, ella ya __.", "en": "When you arrived, she had already eaten.", "fr": "Quand tu es arrivé, elle avait déjà mangé.", "answer": "había comido", "tense": "plup", "inf": "comer"},
    {"es": "Para el lunes, yo __ el informe.", "en": "By Monday, I will have finished the report.", "fr": "D'ici lundi, j'aurai terminé le rapport.", "answer": "habré terminado", "tense": "futperf", "inf": "terminar"},
    {"es": "Ellos __ antes, pero perdieron el tren.", "en": "They would have arrived earlier, but they missed the train.", "fr": "Ils seraient arrivés plus tôt, mais ils ont raté le train.", "answer": "habrían llegado", "tense": "condperf", "inf": "llegar"},
    {"es": "Espero que tú __ tiempo mañana.", "en": "I hope you have time tomorrow.", "fr": "J'espère que tu auras du temps demain.", "answer": "tengas", "tense": "subpres", "inf": "tener"},
    {"es": "Mi madre quería que yo __ más.", "en": "My mother wanted me to study more.", "fr": "Ma mère voulait que j'étudie davantage.", "answer": "estudiara", "tense": "subimp", "inf": "estudiar"},
    {"es": "Me alegra que ustedes __ a la fiesta.", "en": "I'm glad you have come to the party.", "fr": "Je suis content que vous soyez venus à la fête.", "answer": "hayan venido", "tense": "subperf", "inf": "venir"},
    {"es": "Ojalá nosotros __ antes del examen.", "en": "I wish we had studied before the exam.", "fr": "Si seulement nous avions étudié avant l'examen.", "answer": "hubiéramos estudiado", "tense": "subplup", "inf": "estudiar"},
]

BASE_QUESTIONS: list[Question] = [Question.model_validate(q) for q in _RAW]
