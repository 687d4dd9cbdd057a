"""Threshold evaluation of a reading against configured limits."""

from collections.abc import Mapping

from src.monitor.domain.models import ParameterName, Reading, ThresholdSet
from src.monitor.domain.parameters import PARAMETER_ACCESSORS, ParameterAccessor, validate_accessors


class ThresholdEvaluator:
    """
    Pure evaluator returning the parameters currently outside their limits.

    Only parameters present in the threshold set are checked; the others are
    skipped and produce no indicator state at all. Comparisons are strict, so
    a value sitting exactly on a bound is in range.
    """

    def __init__(self, accessors: Mapping[ParameterName, ParameterAccessor] | None = None):
        self.accessors = dict(accessors) if accessors is not None else PARAMETER_ACCESSORS
        validate_accessors(self.accessors)

    def evaluate(self, reading: Reading, thresholds: ThresholdSet) -> frozenset[ParameterName]:
        violations = set()
        for name, limits in thresholds.items():
            value = self.accessors[name](reading)
            if limits.min is not None and value < limits.min:
                violations.add(name)
            elif limits.max is not None and value > limits.max:
                violations.add(name)
        return frozenset(violations)


_default_evaluator = ThresholdEvaluator()


def evaluate(reading: Reading, thresholds: ThresholdSet) -> frozenset[ParameterName]:
    """Evaluate with the built-in accessor table."""
    return _default_evaluator.evaluate(reading, thresholds)
