"""Validation structures and project reference checks.

Pydantic validates the shape of a project file. This module checks what the
schema cannot: references between libraries and cabinets, duplicate ids,
layout proportions, and formulas that reference unknown variables or would
produce parts the engine drops.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from cutlist.application.config.adapter import (
    config_to_dimensions,
    config_to_pattern,
    config_to_rule_set,
    config_to_settings,
)
from cutlist.application.config.schema import (
    CabinetInstanceConfig,
    PatternConfig,
    ProjectConfiguration,
)
from cutlist.domain.defaults import DEFAULT_JOINTS, DEFAULT_RULE_SET
from cutlist.domain.services.context_builder import build_expression_context
from cutlist.domain.services.expression import evaluate_expression, unresolved_names
from cutlist.domain.value_objects import Dimensions, LayoutProportions

# Allowed deviation of a proportion list's sum from 1
PROPORTION_TOLERANCE = 0.01

# Dimensions used to check formulas of patterns without default dimensions
PLACEHOLDER_DIMENSIONS = Dimensions(height=720, width=600, depth=560)


@dataclass
class ValidationError:
    """Represents a blocking validation error.

    Attributes:
        path: JSON path to the invalid field (e.g., "cabinets[0].pattern")
        message: Human-readable description of the error
        value: The invalid value that caused the error
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """Represents a non-blocking validation warning.

    The project can still be calculated, but the output may not be what the
    author intended.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings."""

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if the configuration has no blocking errors."""
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """Get the CLI exit code based on validation status.

        Returns:
            0 if valid with no warnings
            1 if there are errors
            2 if valid but has warnings
        """
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(self, path: str, message: str, value: Any = None) -> "ValidationResult":
        """Add a validation error and return self for chaining."""
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        """Add a validation warning and return self for chaining."""
        self.warnings.append(ValidationWarning(path=path, message=message, suggestion=suggestion))
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Merge another ValidationResult into this one."""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self


def check_duplicate_ids(config: ProjectConfiguration) -> ValidationResult:
    """Report ids declared more than once within a library."""
    result = ValidationResult()
    libraries: dict[str, list[str]] = {
        "materials": [m.id for m in config.materials or ()],
        "joints": [j.id for j in config.joints or ()],
        "rule_sets": [r.id for r in config.rule_sets or ()],
        "patterns": [p.id for p in config.patterns],
        "cabinets": [c.id for c in config.cabinets],
    }
    for section, ids in libraries.items():
        for item_id, count in Counter(ids).items():
            if count > 1:
                result.add_error(
                    path=section,
                    message=f"Duplicate id '{item_id}' appears {count} times",
                    value=item_id,
                )
    return result


def check_references(config: ProjectConfiguration) -> ValidationResult:
    """Report references to materials, joints, rule sets and patterns that do not exist."""
    result = ValidationResult()
    material_ids = {m.id for m in config.materials or ()}
    joint_ids = {
        j.id for j in (config.joints if config.joints is not None else DEFAULT_JOINTS)
    }
    rule_set_ids = {
        r.id for r in (config.rule_sets if config.rule_sets is not None else [DEFAULT_RULE_SET])
    }
    patterns = {p.id: p for p in config.patterns}

    def check_material(path: str, material_id: str | None) -> None:
        if material_id and material_id not in material_ids:
            result.add_error(path, f"Unknown material '{material_id}'", material_id)

    check_material("settings.default_material_id", config.settings.default_material_id)

    for i, rule_set in enumerate(config.rule_sets or ()):
        for role, material_id in rule_set.materials.model_dump().items():
            check_material(f"rule_sets[{i}].materials.{role}", material_id)

    for i, pattern in enumerate(config.patterns):
        for j, rule in enumerate(pattern.parts):
            check_material(f"patterns[{i}].parts[{j}].material_id", rule.material_id)
            if rule.joints is None:
                continue
            for edge, joint_id in rule.joints.model_dump().items():
                if joint_id and joint_id not in joint_ids:
                    result.add_error(
                        f"patterns[{i}].parts[{j}].joints.{edge}",
                        f"Unknown joint '{joint_id}'",
                        joint_id,
                    )

    for i, cabinet in enumerate(config.cabinets):
        path = f"cabinets[{i}]"
        pattern = patterns.get(cabinet.pattern)
        if pattern is None:
            result.add_error(f"{path}.pattern", f"Unknown pattern '{cabinet.pattern}'", cabinet.pattern)
        elif cabinet.dimensions is None and pattern.default_dimensions is None:
            result.add_error(
                f"{path}.dimensions",
                f"Cabinet '{cabinet.id}' has no dimensions and pattern "
                f"'{pattern.id}' declares no defaults",
            )
        if cabinet.rule_set is not None and cabinet.rule_set not in rule_set_ids:
            result.add_error(f"{path}.rule_set", f"Unknown rule set '{cabinet.rule_set}'", cabinet.rule_set)
        for key, material_id in cabinet.material_overrides.items():
            check_material(f"{path}.material_overrides.{key}", material_id)

    return result


def _check_proportion_list(
    result: ValidationResult, path: str, proportions: list[float] | None, expected: int
) -> None:
    if proportions is None:
        return
    if len(proportions) != expected:
        result.add_warning(
            path,
            f"{len(proportions)} proportions given for {expected} slots; "
            f"equal division will be used",
        )
        return
    if any(p < 0 for p in proportions):
        result.add_warning(path, "Negative proportions are ignored; equal division will be used")
        return
    total = sum(proportions)
    if abs(total - 1.0) > PROPORTION_TOLERANCE:
        result.add_warning(
            path,
            f"Proportions sum to {total:.3f}, not 1; they will be normalized",
            suggestion="Make the proportions sum to 1",
        )


def check_proportions(config: ProjectConfiguration) -> ValidationResult:
    """Warn about layout proportions the engine will normalize or ignore."""
    result = ValidationResult()
    patterns = {p.id: p for p in config.patterns}

    for i, pattern in enumerate(config.patterns):
        if pattern.column_proportions is not None:
            _check_proportion_list(
                result,
                f"patterns[{i}].column_proportions",
                pattern.column_proportions,
                len(pattern.columns),
            )

    for i, cabinet in enumerate(config.cabinets):
        pattern = patterns.get(cabinet.pattern)
        if pattern is None:
            continue
        path = f"cabinets[{i}]"
        _check_proportion_list(
            result, f"{path}.zone_proportions", cabinet.zone_proportions, len(pattern.zones)
        )
        _check_proportion_list(
            result, f"{path}.column_proportions", cabinet.column_proportions, len(pattern.columns)
        )
        columns = {c.id: c for c in pattern.columns}
        for column_id, proportions in cabinet.column_zone_proportions.items():
            column = columns.get(column_id)
            column_path = f"{path}.column_zone_proportions.{column_id}"
            if column is None:
                result.add_warning(column_path, f"Pattern '{pattern.id}' has no column '{column_id}'")
                continue
            _check_proportion_list(result, column_path, proportions, len(column.zones))

    return result


def _pattern_context(
    config: ProjectConfiguration,
    pattern: PatternConfig,
    cabinet: CabinetInstanceConfig | None = None,
) -> dict[str, float]:
    domain_pattern = config_to_pattern(pattern)
    dimensions = (
        config_to_dimensions(cabinet.dimensions) if cabinet is not None else None
    ) or domain_pattern.default_dimensions or PLACEHOLDER_DIMENSIONS

    rule_sets = (
        [config_to_rule_set(r) for r in config.rule_sets]
        if config.rule_sets is not None
        else [DEFAULT_RULE_SET]
    )
    rule_set_id = cabinet.rule_set if cabinet is not None else None
    rule_set = next((r for r in rule_sets if r.id == rule_set_id), None) or next(
        (r for r in rule_sets if r.is_default), rule_sets[0] if rule_sets else None
    )

    proportions = None
    if cabinet is not None:
        proportions = LayoutProportions(
            zones=tuple(cabinet.zone_proportions) if cabinet.zone_proportions else None,
            columns=tuple(cabinet.column_proportions) if cabinet.column_proportions else None,
            column_zones={k: tuple(v) for k, v in cabinet.column_zone_proportions.items()},
        )

    context = build_expression_context(
        dimensions,
        config_to_settings(config.settings),
        domain_pattern,
        rule_set,
        proportions=proportions,
    )
    if cabinet is not None:
        context.update({k.lower(): v for k, v in cabinet.variables.items()})
    # Resolved per rule at calculation time
    context["part_thickness"] = context["material_thickness"]
    return context


def check_formulas(config: ProjectConfiguration) -> ValidationResult:
    """Warn about formulas with unknown variables and parts that would be dropped.

    Unknown variables are checked once per pattern against its default
    context extended with every variable the cabinets using it override.
    Dropped parts are checked per cabinet at that cabinet's dimensions.
    """
    result = ValidationResult()

    for i, pattern in enumerate(config.patterns):
        context = _pattern_context(config, pattern)
        for cabinet in config.cabinets:
            if cabinet.pattern == pattern.id:
                context.update({k.lower(): v for k, v in cabinet.variables.items()})

        formulas: list[tuple[str, str | float | None]] = []
        for j, rule in enumerate(pattern.parts):
            base = f"patterns[{i}].parts[{j}]"
            formulas += [
                (f"{base}.length", rule.length),
                (f"{base}.width", rule.width),
                (f"{base}.quantity", rule.quantity),
                (f"{base}.condition", rule.condition),
            ]
        for j, zone in enumerate(pattern.zones):
            formulas.append((f"patterns[{i}].zones[{j}].height", zone.height))

        for path, formula in formulas:
            if formula is None or formula == "":
                continue
            names = unresolved_names(formula, context)
            if names:
                result.add_warning(
                    path,
                    f"Formula {formula!r} references unknown variables: {', '.join(names)}",
                    suggestion="Define them in the pattern's variables or fix the spelling",
                )

    patterns = {p.id: p for p in config.patterns}
    for i, cabinet in enumerate(config.cabinets):
        pattern = patterns.get(cabinet.pattern)
        if pattern is None or (cabinet.dimensions is None and pattern.default_dimensions is None):
            continue
        context = _pattern_context(config, pattern, cabinet)
        for rule in pattern.parts:
            if rule.condition and evaluate_expression(rule.condition, context) == 0:
                continue
            length = evaluate_expression(rule.length, context)
            width = evaluate_expression(rule.width, context)
            if length <= 0 or width <= 0:
                result.add_warning(
                    f"cabinets[{i}]",
                    f"Part '{rule.name}' of cabinet '{cabinet.id}' resolves to "
                    f"{length} x {width} and will be dropped",
                )

    return result


def validate_config(config: ProjectConfiguration) -> ValidationResult:
    """Perform full validation of a project configuration.

    Args:
        config: A ProjectConfiguration instance (already validated by Pydantic)

    Returns:
        ValidationResult containing any errors or warnings
    """
    result = ValidationResult()
    result.merge(check_duplicate_ids(config))
    result.merge(check_references(config))
    result.merge(check_proportions(config))
    result.merge(check_formulas(config))
    return result
