"""Configuration phase evaluator"""

from .evaluator import (
    GraphEvaluator,
    EvaluationResult,
    evaluate_graph,
    select_next_project,
    check_dependencies,
)

__all__ = [
    "GraphEvaluator",
    "EvaluationResult",
    "evaluate_graph",
    "select_next_project",
    "check_dependencies",
]
