"""Rule engine for alias pattern matching."""

from dataclasses import dataclass
from typing import Iterable, List, Dict, Any, Optional, Pattern
import logging
import re
import yaml
from pathlib import Path
from enum import Enum

logger = logging.getLogger(__name__)


class AliasIdiom(Enum):
    """Textual idioms that bind a local alias to another file."""

    TYPEDEF_IMPORT = "TYPEDEF_IMPORT"
    REQUIRE = "REQUIRE"
    DESTRUCTURED_REQUIRE = "DESTRUCTURED_REQUIRE"


@dataclass
class AliasRule:
    """A single alias-recognition rule.

    Patterns use named groups: ``module`` (the quoted specifier), ``path``
    (an optional ``.a.b`` narrowing suffix) and either ``alias`` (one local
    name) or ``names`` (a comma separated list of names).
    """

    rule_id: str
    idiom: AliasIdiom
    pattern: str
    description: str = ""
    strip: bool = False
    multiline: bool = False

    _compiled_pattern: Optional[Pattern] = None

    def __post_init__(self) -> None:
        """Compile the regex pattern."""
        flags = re.MULTILINE | re.DOTALL if self.multiline else 0
        self._compiled_pattern = re.compile(self.pattern, flags)

    @property
    def compiled(self) -> Pattern:
        return self._compiled_pattern

    def match(self, text: str) -> List[Dict[str, Any]]:
        """Match the rule against text and return extracted data."""
        matches = []

        for match in self._compiled_pattern.finditer(text):
            matches.append({
                "rule_id": self.rule_id,
                "idiom": self.idiom,
                "match_text": match.group(0),
                "start": match.start(),
                "end": match.end(),
                "groups": match.groupdict()
            })

        return matches

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AliasRule":
        """Create rule from dictionary."""
        data = data.copy()
        data["idiom"] = AliasIdiom[data["idiom"]]
        return cls(**data)


class RuleEngine:
    """Holds alias rules in the order they must be scanned."""

    def __init__(self) -> None:
        self.rules: List[AliasRule] = []
        self._rules_by_idiom: Dict[AliasIdiom, List[AliasRule]] = {}

    def add_rule(self, rule: AliasRule) -> None:
        """Add a rule to the engine."""
        self.rules.append(rule)
        self._rules_by_idiom.setdefault(rule.idiom, []).append(rule)

    def load_rules_from_yaml(self, yaml_path: Path) -> None:
        """Load rules from a YAML file."""
        with open(yaml_path, "r") as f:
            data = yaml.safe_load(f) or {}

        rules_data = data.get("rules", [])
        for rule_dict in rules_data:
            self.add_rule(AliasRule.from_dict(rule_dict))

        logger.debug("Loaded %d alias rules from %s", len(rules_data), yaml_path)

    def load_default_rules(self) -> None:
        """Load default built-in rules."""
        self.load_rules_from_yaml(Path(__file__).parent / "default_rules.yaml")

    def rules_for(self, idiom: AliasIdiom) -> List[AliasRule]:
        """Get all rules for one idiom."""
        return self._rules_by_idiom.get(idiom, [])

    def get_stats(self) -> Dict[str, Any]:
        """Get statistics about loaded rules."""
        return {
            "total_rules": len(self.rules),
            "by_idiom": {
                idiom.value: len(rules)
                for idiom, rules in self._rules_by_idiom.items()
            }
        }


def create_default_engine(extra_rule_files: Iterable[str] = ()) -> RuleEngine:
    """Create a rule engine with default rules loaded."""
    engine = RuleEngine()
    engine.load_default_rules()
    for rule_file in extra_rule_files:
        engine.load_rules_from_yaml(Path(rule_file))
    return engine
