"""JSON file storage for the installation-wide threshold configuration."""

import json
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from src.monitor.domain.exceptions import ThresholdConfigError
from src.monitor.domain.models import ThresholdSet
from src.monitor.domain.protocols import ThresholdRepository

DEFAULT_STORAGE_KEY = "powerMonitorAlarmSettings"


def parse_thresholds(raw: str) -> ThresholdSet:
    """
    Parse a persisted threshold document.

    Raises:
        ThresholdConfigError: If the document is not valid JSON or not a valid threshold set
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ThresholdConfigError(f"Saved thresholds are not valid JSON: {e}") from e

    try:
        return ThresholdSet.model_validate(data)
    except ValidationError as e:
        raise ThresholdConfigError(
            "Saved thresholds failed validation",
            details={"errors": [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]},
        ) from e


class JsonThresholdStore(ThresholdRepository):
    """
    Threshold repository backed by one JSON file under a fixed storage key.

    The configuration is shared by every device of the installation. It is
    read from disk once and then served from memory; `save` and `reset`
    update both.
    """

    def __init__(self, storage_path: str, storage_key: str = DEFAULT_STORAGE_KEY):
        """
        Initialize threshold store.

        Args:
            storage_path: Directory holding the settings file
            storage_key: Settings file name (without extension)
        """
        self.storage_path = Path(storage_path)
        self.storage_path.mkdir(parents=True, exist_ok=True)
        self.file_path = self.storage_path / f"{storage_key}.json"
        self._cached: ThresholdSet | None = None
        logger.info(f"Threshold store initialized at: {self.file_path}")

    def load(self) -> ThresholdSet:
        if self._cached is not None:
            return self._cached

        if not self.file_path.exists():
            logger.info("No saved thresholds, using defaults")
            return self.reset()

        try:
            self._cached = parse_thresholds(self.file_path.read_text(encoding="utf-8"))
        except (ThresholdConfigError, OSError) as e:
            logger.warning(f"Could not load saved thresholds, falling back to defaults: {e}")
            self._cached = ThresholdSet.defaults()

        return self._cached

    def save(self, thresholds: ThresholdSet) -> None:
        tmp_path = self.file_path.with_suffix(".json.tmp")
        tmp_path.write_text(json.dumps(thresholds.to_payload(), indent=2), encoding="utf-8")
        tmp_path.replace(self.file_path)

        self._cached = thresholds
        logger.info(f"✓ Saved thresholds for {len(thresholds)} parameters")

    def reset(self) -> ThresholdSet:
        defaults = ThresholdSet.defaults()
        self.save(defaults)
        return defaults


class InMemoryThresholdStore(ThresholdRepository):
    """Threshold repository kept in memory only."""

    def __init__(self, thresholds: ThresholdSet | None = None):
        self.thresholds = thresholds if thresholds is not None else ThresholdSet.defaults()

    def load(self) -> ThresholdSet:
        return self.thresholds

    def save(self, thresholds: ThresholdSet) -> None:
        self.thresholds = thresholds

    def reset(self) -> ThresholdSet:
        self.thresholds = ThresholdSet.defaults()
        return self.thresholds
