"""
Built-in prenatal exam schedule.

Used when no customized schedule has been saved and no data file is
configured. General recommendations only; each doctor may adjust them.
"""

from typing import Any

DEFAULT_AUTHOR = "Prenatal care team"

DEFAULT_PERIODS: dict[str, dict[str, Any]] = {
    "1-4": {
        "title": "Weeks 1-4",
        "icon": "🌱",
        "trimester": 1,
        "exams": [
            {"name": "Pregnancy test (beta-hCG)", "highlighted": True},
            {"name": "Start folic acid 5mg/day", "highlighted": True},
        ],
        "consultations": "First visit once the pregnancy is confirmed",
        "observation": "Implantation period. Avoid medication without medical advice.",
    },
    "5-8": {
        "title": "Weeks 5-8",
        "icon": "💗",
        "trimester": 1,
        "exams": [
            {"name": "Transvaginal ultrasound", "highlighted": True},
            {"name": "Blood type and Rh factor"},
            {"name": "Complete blood count"},
            {"name": "Fasting blood glucose"},
            {"name": "Serology (HIV, syphilis, hepatitis B and C, toxoplasmosis, rubella)"},
            {"name": "Urinalysis and urine culture"},
            {"name": "TSH"},
        ],
        "consultations": "Monthly prenatal visit",
        "observation": "Heartbeat visible from 6 weeks.",
    },
    "9-13": {
        "title": "Weeks 9-13",
        "icon": "✨",
        "trimester": 1,
        "exams": [
            {"name": "First trimester anatomy scan (11-14 wk)", "highlighted": True},
            {"name": "Nuchal translucency (NT)", "highlighted": True},
            {"name": "Biochemical screening (PAPP-A, free beta-hCG)"},
            {"name": "NIPT - non-invasive prenatal test (optional)"},
        ],
        "consultations": "Monthly prenatal visit",
        "observation": "Best period for chromosomal abnormality screening.",
    },
    "14-17": {
        "title": "Weeks 14-17",
        "icon": "🎵",
        "trimester": 2,
        "exams": [
            {"name": "Obstetric ultrasound"},
            {"name": "Repeat negative serologies (toxoplasmosis, rubella)"},
        ],
        "consultations": "Monthly prenatal visit",
        "observation": "Period of greatest well-being. Fetal movements start to be felt.",
    },
    "18-22": {
        "title": "Weeks 18-22",
        "icon": "❤️",
        "trimester": 2,
        "exams": [
            {"name": "Second trimester anatomy scan (20-24 wk)", "highlighted": True},
            {"name": "Complete fetal anatomical assessment", "highlighted": True},
            {"name": "Fetal echocardiography (if indicated)"},
            {"name": "Cervical length assessment"},
        ],
        "consultations": "Monthly prenatal visit",
        "observation": "Ideal time to see the baby's sex and assess the whole fetal anatomy.",
    },
    "23-27": {
        "title": "Weeks 23-27",
        "icon": "🧠",
        "trimester": 2,
        "exams": [
            {"name": "75g OGTT - oral glucose tolerance test (24-28 wk)", "highlighted": True},
            {"name": "Follow-up blood count"},
            {"name": "Repeat negative serologies"},
            {"name": "Indirect Coombs test (if Rh negative)"},
        ],
        "consultations": "Prenatal visit every two weeks or monthly",
        "observation": "Gestational diabetes screening. Watch weight gain.",
    },
    "28-31": {
        "title": "Weeks 28-31",
        "icon": "👁️",
        "trimester": 3,
        "exams": [
            {"name": "Third trimester ultrasound", "highlighted": True},
            {"name": "Tdap vaccine (from 20 weeks)", "highlighted": True},
            {"name": "Anti-D immunoglobulin (if Rh negative)"},
        ],
        "consultations": "Prenatal visit every two weeks",
        "observation": "Watch for signs of preterm labor.",
    },
    "32-35": {
        "title": "Weeks 32-35",
        "icon": "🫁",
        "trimester": 3,
        "exams": [
            {"name": "Doppler ultrasound", "highlighted": True},
            {"name": "Cardiotocography (if indicated)"},
            {"name": "Group B Streptococcus (GBS) culture - 35-37 wk", "highlighted": True},
            {"name": "Repeat serologies (HIV, syphilis, hepatitis)"},
            {"name": "Pre-delivery blood count and coagulation panel"},
        ],
        "consultations": "Prenatal visit every two weeks",
        "observation": "Assessment of fetal position, amniotic fluid and fetal well-being.",
    },
    "36-40": {
        "title": "Weeks 36-40",
        "icon": "👶",
        "trimester": 3,
        "exams": [
            {"name": "Ultrasound (estimated weight and fetal position)", "highlighted": True},
            {"name": "Weekly cardiotocography"},
            {"name": "Cervical assessment (Bishop score)"},
            {"name": "Fetal monitoring"},
        ],
        "consultations": "Weekly prenatal visit",
        "observation": (
            "Final stretch! Watch for regular contractions, loss of the mucus plug "
            "and rupture of membranes."
        ),
    },
}
