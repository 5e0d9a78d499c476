"""Static reference data for the thirteen drilled tenses."""

from __future__ import annotations

from pydantic import BaseModel

from app.modules.conjugation.models import TenseId


class TenseEndings(BaseModel):
    ar: list[str]
    er: list[str]
    ir: list[str]


class Tense(BaseModel):
    id: TenseId
    name: str
    level: str
    desc: str
    endings: TenseEndings
    examples: list[tuple[str, str]]


TENSE_NAMES: dict[TenseId, str] = {
    TenseId.PRES: "Presente",
    TenseId.PRET: "Pretérito",
    TenseId.IMP: "Imperfecto",
    TenseId.FUT: "Futuro",
    TenseId.COND: "Condicional",
    TenseId.PRESPERF: "Pretérito perfecto",
    TenseId.PLUP: "Pluscuamperfecto",
    TenseId.FUTPERF: "Futuro perfecto",
    TenseId.CONDPERF: "Condicional perfecto",
    TenseId.SUBPRES: "Subjuntivo",
    TenseId.SUBIMP: "Subjuntivo imperfecto",
    TenseId.SUBPERF: "Subjuntivo perfecto",
    TenseId.SUBPLUP: "Subjuntivo pluscuamperfecto",
}


def _compound(aux: list[str]) -> TenseEndings:
    return TenseEndings(
        ar=[f"{a} -ado" for a in aux],
        er=[f"{a} -ido" for a in aux],
        ir=[f"{a} -ido" for a in aux],
    )


def _tense(tid: TenseId, level: str, desc: str, endings: TenseEndings, examples) -> Tense:
    return Tense(
        id=tid,
        name=TENSE_NAMES[tid],
        level=level,
        desc=desc,
        endings=endings,
        examples=examples,
    )


TENSES: list[Tense] = [
    _tense(
        TenseId.PRES,
        "A1",
        "Habits, general truths, current actions.",
        TenseEndings(
            ar=["-o", "-as", "-a", "-amos", "-áis", "-an"],
            er=["-o", "-es", "-e", "-emos", "-éis", "-en"],
            ir=["-o", "-es", "-e", "-imos", "-ís", "-en"],
        ),
        [
            ("Yo hablo español todos los días.", "I speak Spanish every day."),
            ("Ella come en casa.", "She eats at home."),
            ("Nosotros vivimos en Madrid.", "We live in Madrid."),
            ("¿Estudias ahora?", "Are you studying now?"),
            ("Ellos trabajan mucho.", "They work a lot."),
        ],
    ),
    _tense(
        TenseId.PRET,
        "A2",
        "Completed actions in the past.",
        TenseEndings(
            ar=["-é", "-aste", "-ó", "-amos", "-asteis", "-aron"],
            er=["-í", "-iste", "-ió", "-imos", "-isteis", "-ieron"],
            ir=["-í", "-iste", "-ió", "-imos", "-isteis", "-ieron"],
        ),
        [
            ("Ayer compré pan.", "Yesterday I bought bread."),
            ("Él comió temprano.", "He ate early."),
            ("Nosotros vivimos allí un año.", "We lived there for a year."),
            ("¿Llegaste a tiempo?", "Did you arrive on time?"),
            ("Ellas estudiaron mucho.", "They studied a lot."),
        ],
    ),
    _tense(
        TenseId.IMP,
        "A2",
        "Ongoing/repeated past actions; descriptions.",
        TenseEndings(
            ar=["-aba", "-abas", "-aba", "-ábamos", "-abais", "-aban"],
            er=["-ía", "-ías", "-ía", "-íamos", "-íais", "-ían"],
            ir=["-ía", "-ías", "-ía", "-íamos", "-íais", "-ían"],
        ),
        [
            ("Cuando era niño, jugaba mucho.", "When I was a child, I played a lot."),
            ("Ella comía en la cafetería.", "She used to eat in the cafeteria."),
            ("Vivíamos cerca del parque.", "We used to live near the park."),
            ("¿Qué hacías ayer a las ocho?", "What were you doing yesterday at eight?"),
            ("Siempre llovía en abril.", "It always rained in April."),
        ],
    ),
    _tense(
        TenseId.FUT,
        "B1",
        "Future actions; probability.",
        TenseEndings(
            ar=["-aré", "-arás", "-ará", "-aremos", "-aréis", "-arán"],
            er=["-eré", "-erás", "-erá", "-eremos", "-eréis", "-erán"],
            ir=["-iré", "-irás", "-irá", "-iremos", "-iréis", "-irán"],
        ),
        [
            ("Mañana viajaré a Sevilla.", "Tomorrow I will travel to Seville."),
            ("Ella comerá después.", "She will eat later."),
            ("Viviremos allí en 2027.", "We will live there in 2027."),
            ("¿Llegarán a tiempo?", "Will they arrive on time?"),
            ("Será tarde ya.", "It is probably already late."),
        ],
    ),
    _tense(
        TenseId.COND,
        "B1",
        "Polite requests; hypothetical situations.",
        TenseEndings(
            ar=["-aría", "-arías", "-aría", "-aríamos", "-aríais", "-arían"],
            er=["-ería", "-erías", "-ería", "-eríamos", "-eríais", "-erían"],
            ir=["-iría", "-irías", "-iría", "-iríamos", "-iríais", "-irían"],
        ),
        [
            ("Yo viajaría más si tuviera tiempo.", "I would travel more if I had time."),
            ("¿Podrías ayudarme?", "Could you help me?"),
            ("Ella comería aquí, pero está cerrado.", "She would eat here, but it's closed."),
            ("Viviríamos en la costa.", "We would live on the coast."),
            ("¿Qué harían ustedes?", "What would you do?"),
        ],
    ),
    _tense(
        TenseId.PRESPERF,
        "B1",
        "Past actions connected to the present.",
        _compound(["he", "has", "ha", "hemos", "habéis", "han"]),
        [
            ("He visitado Barcelona.", "I have visited Barcelona."),
            ("¿Has comido ya?", "Have you eaten yet?"),
            ("Ellos han vivido aquí mucho tiempo.", "They have lived here a long time."),
            ("Hemos estudiado bastante.", "We have studied enough."),
            ("No he trabajado hoy.", "I haven't worked today."),
        ],
    ),
    _tense(
        TenseId.PLUP,
        "B2",
        "Actions completed before another past action.",
        _compound(["había", "habías", "había", "habíamos", "habíais", "habían"]),
        [
            ("Ya había estudiado cuando llegaste.", "I had already studied when you arrived."),
            ("Ella había comido antes de salir.", "She had eaten before leaving."),
            ("Habíamos vivido allí dos años.", "We had lived there for two years."),
            ("¿Habías trabajado en eso?", "Had you worked on that?"),
            ("Ellos no habían viajado mucho.", "They hadn't traveled much."),
        ],
    ),
    _tense(
        TenseId.FUTPERF,
        "B2",
        "Something that will have happened by a future time.",
        _compound(["habré", "habrás", "habrá", "habremos", "habréis", "habrán"]),
        [
            ("Para mañana, habré terminado.", "By tomorrow, I will have finished."),
            ("¿Habrás comido antes de llegar?", "Will you have eaten before arriving?"),
            ("Ellos habrán vivido allí diez años.", "They will have lived there ten years."),
            ("Habremos estudiado suficiente.", "We will have studied enough."),
            ("No habrán salido aún.", "They won't have left yet."),
        ],
    ),
    _tense(
        TenseId.CONDPERF,
        "B2",
        "What would have happened.",
        _compound(["habría", "habrías", "habría", "habríamos", "habríais", "habrían"]),
        [
            ("Habría viajado, pero estaba enfermo.", "I would have traveled, but I was sick."),
            ("¿Habrías comido más?", "Would you have eaten more?"),
            ("Ellos habrían vivido allí.", "They would have lived there."),
            ("Habríamos estudiado antes.", "We would have studied earlier."),
            ("No habría llegado tarde.", "I wouldn't have arrived late."),
        ],
    ),
    _tense(
        TenseId.SUBPRES,
        "B1",
        "Wishes, doubts, recommendations in present/future.",
        TenseEndings(
            ar=["-e", "-es", "-e", "-emos", "-éis", "-en"],
            er=["-a", "-as", "-a", "-amos", "-áis", "-an"],
            ir=["-a", "-as", "-a", "-amos", "-áis", "-an"],
        ),
        [
            ("Espero que estudies.", "I hope you study."),
            ("Es posible que él coma aquí.", "It's possible that he eats here."),
            ("Quiero que vivamos juntos.", "I want us to live together."),
            ("Dudo que lleguen tarde.", "I doubt they arrive late."),
            ("Ojalá tengas tiempo.", "Hopefully you have time."),
        ],
    ),
    _tense(
        TenseId.SUBIMP,
        "B2",
        "Wishes/doubts in the past; after conditional.",
        TenseEndings(
            ar=["-ara", "-aras", "-ara", "-áramos", "-arais", "-aran"],
            er=["-iera", "-ieras", "-iera", "-iéramos", "-ierais", "-ieran"],
            ir=["-iera", "-ieras", "-iera", "-iéramos", "-ierais", "-ieran"],
        ),
        [
            ("Quería que vinieras.", "I wanted you to come."),
            ("Si yo tuviera tiempo, estudiaría más.", "If I had time, I'd study more."),
            ("Era importante que él comiera.", "It was important that he eat."),
            ("Dudaban que viviéramos allí.", "They doubted we lived there."),
            ("Ojalá lloviera.", "I wish it would rain."),
        ],
    ),
    _tense(
        TenseId.SUBPERF,
        "B2",
        "Subjunctive with completed action linked to present.",
        _compound(["haya", "hayas", "haya", "hayamos", "hayáis", "hayan"]),
        [
            ("Me alegra que hayas venido.", "I'm glad you have come."),
            ("Es posible que él haya comido.", "It's possible he has eaten."),
            ("Dudo que hayan vivido allí.", "I doubt they have lived there."),
            ("Espero que hayas estudiado.", "I hope you have studied."),
            ("No creo que haya trabajado mucho.", "I don't think he has worked much."),
        ],
    ),
    _tense(
        TenseId.SUBPLUP,
        "C1",
        "Subjunctive with completed action prior to a past reference.",
        _compound(["hubiera", "hubieras", "hubiera", "hubiéramos", "hubierais", "hubieran"]),
        [
            ("Me alegró que hubieras venido.", "I was glad you had come."),
            (
                "Si hubiéramos estudiado, habríamos aprobado.",
                "If we had studied, we would have passed.",
            ),
            ("Dudaba que él hubiera comido.", "I doubted he had eaten."),
            ("Ojalá hubieras vivido allí.", "I wish you had lived there."),
            ("No creían que hubiera trabajado tanto.", "They didn't believe he had worked so much."),
        ],
    ),
]
