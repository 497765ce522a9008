"""Application services: condition evaluation, placeholders, actions, assignment, engine."""

from app.application.services.actions import ActionDispatcher
from app.application.services.assignment import (
    AssignmentStrategies,
    LeastLoadedAssignment,
    RandomAssignment,
    RoundRobinAssignment,
)
from app.application.services.condition_evaluator import evaluate, evaluate_all
from app.application.services.placeholder_resolver import PlaceholderResolver, resolve
from app.application.services.workflow_engine import WorkflowEngine

__all__ = [
    "ActionDispatcher",
    "AssignmentStrategies",
    "LeastLoadedAssignment",
    "PlaceholderResolver",
    "RandomAssignment",
    "RoundRobinAssignment",
    "WorkflowEngine",
    "evaluate",
    "evaluate_all",
    "resolve",
]
