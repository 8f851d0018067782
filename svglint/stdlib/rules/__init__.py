"""Built-in rules, keyed by the name used in configurations."""

from svglint.kernel.linting.registry import RuleFactory
from svglint.stdlib.rules.attr import AttrRule
from svglint.stdlib.rules.custom import custom
from svglint.stdlib.rules.elm import ElmRule
from svglint.stdlib.rules.valid import valid

BUILTIN_RULES: dict[str, RuleFactory] = {
    "attr": AttrRule,
    "custom": custom,
    "elm": ElmRule,
    "valid": valid,
}

__all__ = ["BUILTIN_RULES", "AttrRule", "ElmRule", "custom", "valid"]
