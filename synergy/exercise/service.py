# -*- coding: utf-8 -*-
"""Exercise — expanding a schedule proposal into dated exercise records."""

from __future__ import annotations

from typing import List

from ..dates import add_days, parse_day
from ..oracle.models import WorkoutScheduleProposal
from .models import ExerciseCreate


def schedule_to_exercises(proposal: WorkoutScheduleProposal) -> List[ExerciseCreate]:
    """One record per proposed exercise, dated anchor + day offset."""
    anchor = parse_day(proposal.anchor)
    records: List[ExerciseCreate] = []
    for day in proposal.days:
        when = add_days(anchor, day.day_offset).isoformat()
        for ex in day.exercises:
            records.append(
                ExerciseCreate(
                    name=ex.name,
                    details=ex.details,
                    time=ex.time or "Anytime",
                    completed=False,
                    is_ai_generated=True,
                    date=when,
                )
            )
    return records
