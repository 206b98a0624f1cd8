# -*- coding: utf-8 -*-
"""Oracle — workout schedule proposals from a free-text goal."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List

from ..errors import OracleFailure, ValidationFailure
from .client import OracleClient
from .models import PlanScope, ProposedExercise, ScheduleDay, WorkoutScheduleProposal
from .parsing import coerce_number, first_present, parse_json_object

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a fitness coach. Return STRICT JSON only. "
    "Do NOT wrap in markdown or code fences. "
    "Output MUST start with '{' and end with '}'."
)

_SCOPE_RULES = {
    PlanScope.auto: (
        '- If the user asks for a "7 day plan", a "weekly split", or implies multiple days '
        '(e.g. "push pull legs"), generate a schedule for 7 days (dayOffset 0 to 6).\n'
        "- If the user asks for a single workout, generate only dayOffset 0.\n"
    ),
    PlanScope.single: "- Generate a single workout for dayOffset 0 only.\n",
    PlanScope.week: "- Generate a schedule for 7 days (dayOffset 0 to 6).\n",
}


def _prompt(goal: str, anchor: date, scope: PlanScope) -> str:
    return (
        f'Generate a workout routine based on the user\'s goal: "{goal}".\n'
        f"Context: The plan starts on {anchor.strftime('%A')} ({anchor.isoformat()}).\n"
        "\n"
        "IMPORTANT:\n"
        f"{_SCOPE_RULES[scope]}"
        '- "dayOffset" 0 is the starting day, 1 is the day after, etc.\n'
        "\n"
        "Output JSON schema (STRICT):\n"
        "{\n"
        '  "schedule": [\n'
        "    {\n"
        '      "dayOffset": number,\n'
        '      "exercises": [{"name": "string", "details": "string", "time": "string"}]\n'
        "    }\n"
        "  ]\n"
        "}\n"
    )


def _offset(day: Dict[str, Any], scope: PlanScope) -> int:
    raw = first_present(day, ["dayOffset", "day_offset", "offset"])
    if raw is None:
        return 0
    number = coerce_number(raw)
    if number is None or not number.is_integer():
        raise OracleFailure(f"Invalid dayOffset: {raw!r}")
    offset = int(number)
    if not 0 <= offset <= scope.max_offset:
        raise OracleFailure(f"dayOffset {offset} outside 0..{scope.max_offset} for {scope.value} plan")
    return offset


def _exercise(raw: Any) -> ProposedExercise:
    if not isinstance(raw, dict):
        raise OracleFailure("Exercise entry is not an object")
    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        raise OracleFailure("Exercise entry has no name")
    details = raw.get("details")
    time = raw.get("time")
    return ProposedExercise(
        name=name.strip(),
        details=details.strip() if isinstance(details, str) else ("" if details is None else str(details)),
        time=time.strip() if isinstance(time, str) and time.strip() else "Anytime",
    )


def normalize_schedule(raw: Any, anchor: date, scope: PlanScope = PlanScope.auto) -> WorkoutScheduleProposal:
    """Validated proposal; entries sharing an offset are merged in arrival order."""
    if not isinstance(raw, dict) or not isinstance(raw.get("schedule"), list):
        raise OracleFailure("Oracle response has no schedule list")

    by_offset: Dict[int, List[ProposedExercise]] = {}
    for day in raw["schedule"]:
        if not isinstance(day, dict):
            raise OracleFailure("Schedule entry is not an object")
        offset = _offset(day, scope)
        exercises = day.get("exercises")
        if not isinstance(exercises, list):
            raise OracleFailure(f"Schedule entry for dayOffset {offset} has no exercise list")
        by_offset.setdefault(offset, []).extend(_exercise(ex) for ex in exercises)

    days = [ScheduleDay(day_offset=o, exercises=ex) for o, ex in by_offset.items() if ex]
    if not days:
        raise OracleFailure("Oracle proposed no exercises")
    return WorkoutScheduleProposal(anchor=anchor.isoformat(), scope=scope, days=days)


def propose_schedule(
    goal: str,
    anchor: date,
    client: OracleClient,
    scope: PlanScope = PlanScope.auto,
) -> WorkoutScheduleProposal:
    text = (goal or "").strip()
    if not text:
        raise ValidationFailure("Workout goal is empty")
    content = client.complete(system=SYSTEM_PROMPT, prompt=_prompt(text, anchor, scope))
    proposal = normalize_schedule(parse_json_object(content), anchor, scope)
    logger.info(
        "proposed %d workout day(s) from %s (%s)",
        len(proposal.days), proposal.anchor, scope.value,
    )
    return proposal
