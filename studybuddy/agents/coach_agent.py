"""Coach agent: tracks study progress and plans the week."""
from google.adk.agents.llm_agent import Agent

from studybuddy.agents.tools import (
    get_current_date,
    get_progress_summary,
    log_quiz_result,
    log_study_session,
    plan_study_week,
)
from studybuddy.settings import DEFAULT_MODEL

coach_agent = Agent(
    model=DEFAULT_MODEL,
    name="coach_agent",
    description="Records study sessions and quiz results, reports progress and creates study plans.",
    instruction=(
        "Use log_study_session and log_quiz_result to record what the student did, get_progress_summary "
        "to discuss their progress, and plan_study_week (with get_current_date) to schedule study. "
        "Be encouraging. If has_focus_data is false, suggest completing a Pomodoro session first."
    ),
    tools=[log_study_session, log_quiz_result, get_progress_summary, plan_study_week, get_current_date],
)
