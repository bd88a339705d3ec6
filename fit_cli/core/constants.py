"""Static constants and lookup tables for the fitness log."""

from __future__ import annotations

CATEGORIES = ("STRENGTH", "CARDIO", "CORE")

BODY_PARTS = (
    "part_chest",
    "part_back",
    "part_shoulders",
    "part_hips",
    "part_thighs",
    "part_calves",
    "part_arms",
    "part_abs",
    "part_cardio",
    "part_other",
)

# Older records stored legs as a single part.
BODY_PART_ALIASES = {"part_legs": "part_thighs"}

OTHER_BODY_PART = "part_other"

BODY_PART_LABELS = {
    "part_chest": "Chest",
    "part_back": "Back",
    "part_shoulders": "Shoulders",
    "part_hips": "Hips",
    "part_thighs": "Thighs",
    "part_calves": "Calves",
    "part_arms": "Arms",
    "part_abs": "Abs",
    "part_cardio": "Cardio",
    "part_other": "Other",
}

EQUIPMENT = (
    "equip_barbell",
    "equip_dumbbell",
    "equip_machine",
    "equip_cable",
    "equip_bodyweight",
    "equip_cardio_machine",
    "equip_kettlebell",
    "equip_smith_machine",
    "equip_resistance_band",
    "equip_medicine_ball",
    "equip_trx",
    "equip_bench",
    "equip_other",
)

DEFAULT_LOG_TYPE_BY_CATEGORY = {
    "STRENGTH": "WEIGHT_REPS",
    "CARDIO": "DURATION",
    "CORE": "DURATION",
}

LOG_TYPE_LABELS = {
    "WEIGHT_REPS": "Weight x Reps",
    "REPS_ONLY": "Reps only",
    "DURATION": "Duration",
}

DAY_TYPE_LABELS = {
    "CORE": "Core training day",
    "ACTIVE_REST": "Active recovery day",
    "LIGHT": "Light activity day",
    "REST": "Rest day",
}

WEEKDAY_NAMES = {
    1: "Mon",
    2: "Tue",
    3: "Wed",
    4: "Thu",
    5: "Fri",
    6: "Sat",
    7: "Sun",
}

CHART_LABEL_FORMAT = "%m/%d"

DEFAULT_WEIGHT_REMINDER_DAYS = 7
