"""Policy - Eligibility evaluation and the branch-protection cache."""

from automerger.policy.cache import BranchProtectionCache
from automerger.policy.evaluator import EligibilityEvaluator
from automerger.policy.models import Policy, Verdict

__all__ = [
    "BranchProtectionCache",
    "EligibilityEvaluator",
    "Policy",
    "Verdict",
]
