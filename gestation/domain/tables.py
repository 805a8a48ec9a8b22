"""
Fixed reference tables for gestational dating.

A term pregnancy is 280 days. The nine "commercial" months split those days
into 280 / 9 ~= 31.11 day blocks, rounded to whole-day breakpoints. The week
ranges below are the week+day decomposition of each block and are kept as
published rather than derived, so the timeline always shows the same labels.
"""

from gestation.domain.models import MonthBreakpoint, TrimesterBoundary

FULL_TERM_DAYS = 280
MAX_DISPLAY_DAYS = 300
DAYS_PER_WEEK = 7

MONTH_LIMITS: tuple[int, ...] = (31, 62, 93, 124, 155, 186, 217, 248, 280)

MONTH_TABLE: tuple[MonthBreakpoint, ...] = (
    MonthBreakpoint(month=1, cumulative_days=31, start_week=0, start_day=0, end_week=4, end_day=3, trimester=1),
    MonthBreakpoint(month=2, cumulative_days=62, start_week=4, start_day=3, end_week=8, end_day=6, trimester=1),
    MonthBreakpoint(month=3, cumulative_days=93, start_week=8, start_day=6, end_week=13, end_day=2, trimester=1),
    MonthBreakpoint(month=4, cumulative_days=124, start_week=13, start_day=2, end_week=17, end_day=5, trimester=2),
    MonthBreakpoint(month=5, cumulative_days=155, start_week=17, start_day=5, end_week=22, end_day=1, trimester=2),
    MonthBreakpoint(month=6, cumulative_days=186, start_week=22, start_day=1, end_week=26, end_day=4, trimester=2),
    MonthBreakpoint(month=7, cumulative_days=217, start_week=26, start_day=4, end_week=31, end_day=0, trimester=3),
    MonthBreakpoint(month=8, cumulative_days=248, start_week=31, start_day=0, end_week=35, end_day=3, trimester=3),
    MonthBreakpoint(month=9, cumulative_days=280, start_week=35, start_day=3, end_week=40, end_day=0, trimester=3),
)

TRIMESTERS: tuple[TrimesterBoundary, ...] = (
    TrimesterBoundary(number=1, days_end=93, week_end=13, color_tag="pink"),
    TrimesterBoundary(number=2, days_end=186, week_end=27, color_tag="purple"),
    TrimesterBoundary(number=3, days_end=280, week_end=40, color_tag="blue"),
)

# (upper week, period key), checked in ascending order; anything later is "36-40"
EXAM_PERIOD_THRESHOLDS: tuple[tuple[int, str], ...] = (
    (4, "1-4"),
    (8, "5-8"),
    (13, "9-13"),
    (17, "14-17"),
    (22, "18-22"),
    (27, "23-27"),
    (31, "28-31"),
    (35, "32-35"),
)
LAST_EXAM_PERIOD = "36-40"

PERIOD_ORDER: tuple[str, ...] = tuple(key for _, key in EXAM_PERIOD_THRESHOLDS) + (
    LAST_EXAM_PERIOD,
)

# Week -> (title, description) of what happens around that week
WEEK_MILESTONES: dict[int, tuple[str, str]] = {
    4: ("Implantation", "The embryo is implanting in the uterus"),
    6: ("Heartbeat", "The baby's heart can already be seen on ultrasound"),
    8: ("First movements", "The embryo starts moving (not yet felt by the mother)"),
    12: ("End of the 1st trimester", "All major organs are formed"),
    16: ("Noticeable movements", "The mother may start feeling the baby move"),
    20: ("Halfway there", "Ideal time for the anatomy scan"),
    24: ("Viability", "The baby would have a chance of surviving if born now"),
    28: ("3rd trimester", "The baby opens its eyes and reacts to sounds"),
    32: ("Position", "The baby is usually already head down"),
    36: ("Mature lungs", "The lungs are almost ready to breathe"),
    37: ("Early term", 'The baby is considered "term" and can be born safely'),
    40: ("Due date", "Estimated delivery date - the baby may arrive at any moment"),
}

TRIMESTER_DESCRIPTIONS: dict[int, str] = {
    1: "Organ formation",
    2: "Growth and development",
    3: "Maturation and preparation for birth",
}
