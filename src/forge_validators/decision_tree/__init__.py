"""Decision-tree EMV rollback, optimal paths and risk profiles."""

from .risk import (
    RiskProfileSummary,
    risk_profile,
    risk_profile_table,
    summarize_risk_profile,
)
from .rollback import (
    DEFAULT_PROBABILITY_TOLERANCE,
    evaluate_decision_tree,
    optimal_path,
    resolve_probabilities,
    rollback,
)
from .types import (
    DecisionTreeError,
    DecisionTreeResult,
    MissingProbabilityPolicy,
    NodeKind,
    RiskOutcome,
    RolledNode,
    TreeNode,
)

__all__ = [
    "NodeKind",
    "MissingProbabilityPolicy",
    "DecisionTreeError",
    "TreeNode",
    "RolledNode",
    "RiskOutcome",
    "DecisionTreeResult",
    "RiskProfileSummary",
    "DEFAULT_PROBABILITY_TOLERANCE",
    "resolve_probabilities",
    "rollback",
    "optimal_path",
    "evaluate_decision_tree",
    "risk_profile",
    "risk_profile_table",
    "summarize_risk_profile",
]
