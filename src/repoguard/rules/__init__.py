"""Rule engine — compiled rules and rule-set construction."""

from repoguard.rules.models import InvalidPatternError, Rule, RuleError
from repoguard.rules.ruleset import (
    RuleSet,
    compile_rules,
    load_custom_patterns,
    with_custom_rules,
)

__all__ = [
    "InvalidPatternError",
    "Rule",
    "RuleError",
    "RuleSet",
    "compile_rules",
    "load_custom_patterns",
    "with_custom_rules",
]
