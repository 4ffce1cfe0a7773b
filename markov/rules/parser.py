"""Parser for Markov rewrite statements and algorithm files."""

import logging
import re
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from .models import EMPTY_WORD, MalformedStatement, Rule

logger = logging.getLogger(__name__)

# lhs (->|=>) [.] rhs, where each side is a run of non-blank characters that
# may carry an empty word marker at either end
STATEMENT_REGEX = re.compile(
    r"^\s*(?P<lhs>!?[^\s!.]*!?)\s*[-=]>\s*(?P<closing>\.)?\s*(?P<rhs>!?[^\s!.]*!?)\s*$"
)


def _clean(token: str) -> str:
    """Strip empty word markers from a token, leaving its functional form."""
    return token.replace(EMPTY_WORD, "")


def compile_rule(statement: str) -> Rule:
    """
    Compile a rewrite statement into a Rule.

    Format: <lhs> -> <rhs>, <lhs> => <rhs>, or with a '.' right after the
    arrow for a terminating rule (<lhs> ->. <rhs>). Any amount of whitespace is
    allowed between the parts but not inside <lhs> or <rhs>. The empty word is
    written as '!'.

    Examples:
        ab -> ba
        a ->. !
        ! => x

    Args:
        statement: The statement text to compile

    Returns:
        The compiled Rule

    Raises:
        MalformedStatement: If the statement is invalid
    """
    if not isinstance(statement, str):
        raise MalformedStatement(f"Invalid statement: {statement!r}")

    compiled = STATEMENT_REGEX.match(statement)
    if not compiled:
        raise MalformedStatement(f"Invalid statement: {statement!r}")

    lhs = compiled.group("lhs")
    rhs = compiled.group("rhs")

    if not lhs:
        raise MalformedStatement(f"Invalid statement, there is no LHS: {statement!r}")
    if not rhs:
        raise MalformedStatement(f"Invalid statement, there is no RHS: {statement!r}")
    if lhs == EMPTY_WORD * 2:
        raise MalformedStatement(
            f"Invalid statement, LHS contains two empty word markers: {statement!r}"
        )
    if rhs == EMPTY_WORD * 2:
        raise MalformedStatement(
            f"Invalid statement, RHS contains two empty word markers: {statement!r}"
        )

    return Rule(_clean(lhs), _clean(rhs), compiled.group("closing") is not None)


def _is_skipped_line(line: str) -> bool:
    """Blank lines and comments carry no statement."""
    return not line or line.startswith("#")


def parse_rules(text: str) -> list[Rule]:
    """
    Parse rules from text, one statement per line.

    Blank lines and lines starting with '#' are ignored.

    Raises:
        MalformedStatement: If any statement is invalid
    """
    rules = []
    for line_num, line in enumerate(text.splitlines(), 1):
        line = line.strip()
        if _is_skipped_line(line):
            continue

        try:
            rules.append(compile_rule(line))
        except MalformedStatement as e:
            raise MalformedStatement(f"Error on line {line_num}: {e}") from e

    return rules


def parse_rules_file(file_path: str | Path) -> list[Rule]:
    """
    Parse rules from a plain statements file (one statement per line).

    Raises:
        MalformedStatement: If any statement is invalid
        FileNotFoundError: If the file doesn't exist
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found: {file_path}")

    rules = parse_rules(path.read_text(encoding="utf-8"))
    logger.debug("Loaded %d rule(s) from %s", len(rules), path)
    return rules


def _parse_yaml_statements(algorithm: dict[str, Any], algorithm_name: str) -> list[Rule]:
    """Compile the statements listed under an algorithm's 'rules' key."""
    statements = algorithm.get("rules") or []
    if not isinstance(statements, list):
        raise MalformedStatement(f"Algorithm '{algorithm_name}': 'rules' must be a list")

    rules = []
    for index, statement in enumerate(statements):
        try:
            rules.append(compile_rule(statement))
        except MalformedStatement as e:
            raise MalformedStatement(
                f"Error in algorithm '{algorithm_name}', rule {index + 1}: {e}"
            ) from e
    return rules


def _resolve_extends(
    algorithms: dict[str, Any],
    algorithm_name: str,
    resolved: set[str],
) -> list[Rule]:
    """Recursively resolve algorithm inheritance, parent rules first."""
    if algorithm_name in resolved:
        raise MalformedStatement(f"Circular dependency detected in algorithm '{algorithm_name}'")

    if algorithm_name not in algorithms:
        raise MalformedStatement(f"Algorithm '{algorithm_name}' not found (referenced by 'extends')")

    resolved.add(algorithm_name)
    algorithm = algorithms[algorithm_name] or {}
    if not isinstance(algorithm, dict):
        raise MalformedStatement(f"Algorithm '{algorithm_name}' must be a dictionary")

    inherited: list[Rule] = []
    if "extends" in algorithm:
        inherited = _resolve_extends(algorithms, algorithm["extends"], resolved)

    return inherited + _parse_yaml_statements(algorithm, algorithm_name)


def _load_yaml_file(file_path: str | Path) -> Any:
    """Load a YAML file."""
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Algorithm file not found: {file_path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise MalformedStatement(f"Invalid YAML: {e}") from e


def _validate_algorithms_structure(data: Any, algorithm_name: str) -> dict[str, Any]:
    """Validate and extract the algorithms mapping from YAML data."""
    if not isinstance(data, dict):
        raise MalformedStatement("YAML file must contain a dictionary")

    if "algorithms" not in data:
        raise MalformedStatement("YAML file missing 'algorithms' key")

    algorithms = data["algorithms"]
    if not isinstance(algorithms, dict):
        raise MalformedStatement("'algorithms' must be a dictionary")

    if algorithm_name not in algorithms:
        available = ", ".join(algorithms.keys())
        raise MalformedStatement(
            f"Algorithm '{algorithm_name}' not found. Available algorithms: {available}"
        )

    return algorithms


def list_yaml_algorithms(file_path: str | Path) -> dict[str, str]:
    """Return the algorithm names in a YAML file mapped to their descriptions."""
    data = _load_yaml_file(file_path)
    if not isinstance(data, dict) or not isinstance(data.get("algorithms"), dict):
        raise MalformedStatement("YAML file missing 'algorithms' key")

    return {
        name: (body or {}).get("description", "") if isinstance(body, dict) else ""
        for name, body in data["algorithms"].items()
    }


def parse_yaml_algorithms_file(file_path: str | Path, algorithm_name: str = "default") -> list[Rule]:
    """
    Parse the rules of one algorithm from a YAML file.

    Example:
        algorithms:
          unary:
            description: Strip a leading marker
            rules:
              - "|0 -> 0||"
          binary:
            extends: unary
            rules:
              - "1 -> 0|"

    Args:
        file_path: Path to the YAML algorithm file
        algorithm_name: Name of the algorithm to load (default: "default")

    Returns:
        Rules of the algorithm, inherited rules first

    Raises:
        MalformedStatement: If the YAML is invalid or a statement is malformed
        FileNotFoundError: If the file doesn't exist
    """
    data = _load_yaml_file(file_path)
    algorithms = _validate_algorithms_structure(data, algorithm_name)

    resolved: set[str] = set()
    rules = _resolve_extends(algorithms, algorithm_name, resolved)
    logger.debug("Loaded %d rule(s) for algorithm '%s'", len(rules), algorithm_name)
    return rules
