"""Root agent: ADK entrypoint; routes to tutor or coach."""
from google.adk.agents.llm_agent import Agent

from studybuddy.agents.coach_agent import coach_agent
from studybuddy.agents.tutor_agent import tutor_agent
from studybuddy.settings import DEFAULT_MODEL

root_agent = Agent(
    model=DEFAULT_MODEL,
    name="root_agent",
    description="A helpful study buddy for learning from documents and tracking progress.",
    instruction=(
        "Route questions about documents, quizzes, flashcards and summaries to tutor_agent. "
        "Route study sessions, quiz scores, progress and study plans to coach_agent."
    ),
    sub_agents=[tutor_agent, coach_agent],
)
