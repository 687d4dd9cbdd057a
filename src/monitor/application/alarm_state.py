"""Alarm state: current violations, mute flag and derived banner/sound decisions."""

from collections.abc import Iterable

from loguru import logger

from src.monitor.domain.models import AlarmDecision, ParameterName

BANNER_LIMIT = 3

_PARAMETER_ORDER = {name: index for index, name in enumerate(ParameterName)}


class AlarmState:
    """
    Holds the violation set and the mute flag.

    The violation set is replaced wholesale on every update: resolved alarms
    disappear and new ones appear immediately, without hysteresis. Muting only
    silences the sound; the banner keeps showing while violations exist.
    """

    def __init__(self, muted: bool = False):
        self.violations: frozenset[ParameterName] = frozenset()
        self.muted = muted

    @property
    def severity(self) -> int:
        return len(self.violations)

    def ordered_violations(self) -> list[ParameterName]:
        return sorted(self.violations, key=_PARAMETER_ORDER.__getitem__)

    def update(self, violations: Iterable[ParameterName]) -> AlarmDecision:
        """Replace the violation set and derive the resulting decision."""
        previous = self.violations
        self.violations = frozenset(violations)

        if self.violations != previous:
            raised = sorted(p.value for p in self.violations - previous)
            cleared = sorted(p.value for p in previous - self.violations)
            logger.info(f"Alarm set changed: raised={raised} cleared={cleared}")

        return self.decision()

    def mute(self) -> AlarmDecision:
        """Silence the alarm sound. The banner is left as it is."""
        self.muted = True
        logger.info("Alarm sound muted")
        return self.decision()

    def unmute(self) -> AlarmDecision:
        self.muted = False
        logger.info("Alarm sound unmuted")
        return self.decision()

    def clear(self) -> AlarmDecision:
        """Drop all violations, keeping the mute flag."""
        self.violations = frozenset()
        return self.decision()

    def decision(self) -> AlarmDecision:
        banner_visible = bool(self.violations)
        should_play_sound = banner_visible and not self.muted
        return AlarmDecision(
            banner_visible=banner_visible,
            banner_text=self._banner_text(),
            status_text=f"{self.severity} Alarm(s)" if banner_visible else "No Alarms",
            should_play_sound=should_play_sound,
            stop_sound=not should_play_sound,
        )

    def _banner_text(self) -> str:
        if not self.violations:
            return ""
        names = [p.value for p in self.ordered_violations()]
        suffix = "..." if len(names) > BANNER_LIMIT else ""
        return f"Alarms: {', '.join(names[:BANNER_LIMIT])}{suffix}"
