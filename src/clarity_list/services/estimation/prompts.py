"""Prompt templates for the model-backed estimation backend."""

from __future__ import annotations

from .schemas import EstimateCompletionTimeInput, WarnOverloadedScheduleInput

ESTIMATE_SYSTEM_PROMPT = """\
You estimate how long a to-do item will take, using the user's own history.

Compare the new task with the completed tasks listed and weigh the most
similar ones most heavily. When no history is given, give a realistic
estimate from the description alone.

Reply with a single JSON object and nothing else:
{"estimatedCompletionTimeMinutes": <number of minutes>, "reasoning": "<one or two sentences>"}
"""

OVERLOAD_SYSTEM_PROMPT = """\
You are a scheduling assistant that helps people avoid overcommitting.

You get the tasks due on one day and the minutes the user needed for tasks
they completed before. Estimate the total minutes needed for all of the
day's tasks. When no history is given, assume every task takes
{default_task_minutes} minutes. The user has about {capacity_minutes}
minutes available on a day.

Reply with a single JSON object and nothing else:
{{"isOverloaded": <true|false>, "estimatedCompletionTime": <total minutes>, "warningMessage": "<text>"}}

warningMessage must be an empty string when isOverloaded is false. When it
is true, write a short, friendly warning that mentions the estimated total,
for example: "You may be overcommitting yourself on this day: these tasks
need about 540 minutes, more than you usually get done."
"""


def render_estimate_prompt(payload: EstimateCompletionTimeInput) -> str:
    lines = [f"New task: {payload.task_description}", "", "Completed tasks:"]
    if payload.past_tasks:
        lines.extend(
            f"- {p.description} ({p.completion_time_minutes:g} minutes)"
            for p in payload.past_tasks
        )
    else:
        lines.append("- none yet")
    return "\n".join(lines)


def render_overload_prompt(payload: WarnOverloadedScheduleInput) -> str:
    lines = ["Tasks due:"]
    lines.extend(f"- {t.due_date.isoformat()}: {t.description}" for t in payload.tasks)
    history = ", ".join(f"{m:g}" for m in payload.historical_completion_times)
    lines.append("")
    lines.append(f"Historical completion times (minutes): {history or 'none'}")
    return "\n".join(lines)
