"""Device selection state machine."""

from loguru import logger


class DeviceSession:
    """
    Tracks the selected device.

    Starts unselected. Every explicit selection (including re-selecting the
    same device) bumps `epoch`; fetch results tagged with an older epoch
    belong to a previous selection and must be dropped. There is no way back
    to the unselected state.
    """

    def __init__(self):
        self.selected_device_id: str | None = None
        self.epoch = 0

    @property
    def is_selected(self) -> bool:
        return self.selected_device_id is not None

    def select(self, device_id: str) -> int:
        """Select a device and return the new selection epoch."""
        if not device_id:
            raise ValueError("device_id must be a non-empty string")

        previous = self.selected_device_id
        self.selected_device_id = device_id
        self.epoch += 1

        logger.info(f"Selected device {device_id} (previous={previous}, epoch={self.epoch})")
        return self.epoch

    def is_current(self, device_id: str, epoch: int) -> bool:
        """Whether a result for (device_id, epoch) still matches the selection."""
        return self.selected_device_id == device_id and self.epoch == epoch
