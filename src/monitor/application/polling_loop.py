"""Polling loop driving fetch, display, chart and alarm updates for the selected device."""

import asyncio
from collections.abc import Callable
from datetime import datetime

from loguru import logger

from src.monitor.application.alarm_state import AlarmState
from src.monitor.application.context import MonitorContext
from src.monitor.application.display import format_reading
from src.monitor.application.rolling_buffer import sample_from_reading
from src.monitor.application.threshold_evaluator import ThresholdEvaluator
from src.monitor.domain.exceptions import ReadingError
from src.monitor.domain.models import AlarmDecision, Connectivity, DashboardState, Reading
from src.monitor.domain.protocols import AlarmSound, ChartRenderer, ReadingSource, ThresholdRepository
from src.monitor.infrastructure.logging import LoggingContext


def _local_now() -> datetime:
    return datetime.now().astimezone()


class PollingLoop:
    """
    Cooperative, single-threaded driver of the dashboard core.

    A poll timer launches one fetch cycle per tick while a device is selected;
    a tick that finds the previous fetch still pending is skipped, so at most
    one fetch is outstanding. An optional second timer redraws the chart from
    the buffer on its own cadence; without it the chart is redrawn after every
    successful fetch.

    Each fetch cycle is tagged with the selection epoch it was started for.
    Results that come back after the user selected another device are dropped.
    """

    def __init__(
        self,
        source: ReadingSource,
        thresholds: ThresholdRepository,
        context: MonitorContext | None = None,
        evaluator: ThresholdEvaluator | None = None,
        sound: AlarmSound | None = None,
        renderer: ChartRenderer | None = None,
        interval_s: float = 2.0,
        redraw_interval_s: float | None = 5.0,
        clock: Callable[[], datetime] | None = None,
    ):
        """
        Initialize polling loop.

        Args:
            source: Where latest readings come from
            thresholds: Installation-wide threshold configuration
            context: Dashboard state (a fresh one by default)
            evaluator: Threshold evaluator (built-in accessor table by default)
            sound: Audio collaborator, optional
            renderer: Chart collaborator, optional
            interval_s: Seconds between poll ticks
            redraw_interval_s: Seconds between chart redraws, None to redraw per fetch
            clock: Source of the local receive time (labels and last_update)
        """
        if interval_s <= 0:
            raise ValueError(f"interval_s must be positive, got {interval_s}")
        if redraw_interval_s is not None and redraw_interval_s <= 0:
            raise ValueError(f"redraw_interval_s must be positive, got {redraw_interval_s}")

        self.source = source
        self.thresholds = thresholds
        self.context = context or MonitorContext()
        self.evaluator = evaluator or ThresholdEvaluator()
        self.sound = sound
        self.renderer = renderer
        self.interval_s = interval_s
        self.redraw_interval_s = redraw_interval_s
        self.clock = clock or _local_now

        self._inflight: asyncio.Task | None = None
        self._timers: list[asyncio.Task] = []

    @property
    def alarms(self) -> AlarmState:
        return self.context.alarms

    @property
    def running(self) -> bool:
        return any(not t.done() for t in self._timers)

    @property
    def fetch_in_flight(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    def start(self) -> None:
        """Start the poll timer and, if configured, the redraw timer."""
        if self.running:
            logger.warning("Polling loop already running")
            return

        self._timers = [asyncio.create_task(self._poll_timer(), name="monitor:poll")]
        if self.redraw_interval_s is not None:
            self._timers.append(asyncio.create_task(self._redraw_timer(), name="monitor:redraw"))

        logger.info(
            f"Polling loop started: interval={self.interval_s}s, "
            f"redraw={'per fetch' if self.redraw_interval_s is None else f'{self.redraw_interval_s}s'}"
        )

    async def teardown(self) -> None:
        """Stop both timers and any pending fetch."""
        tasks = list(self._timers)
        if self._inflight is not None:
            tasks.append(self._inflight)

        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

        self._timers.clear()
        self._inflight = None
        logger.info("Polling loop stopped")

    def tick(self) -> asyncio.Task | None:
        """
        Run one poll tick.

        Returns:
            The launched fetch task, or None when unselected or a fetch is pending
        """
        session = self.context.session
        if not session.is_selected:
            return None

        if self.fetch_in_flight:
            logger.debug(f"Fetch for {session.selected_device_id} still pending, skipping tick")
            return None

        return self._launch_fetch(session.selected_device_id, session.epoch)

    def select_device(self, device_id: str) -> asyncio.Task:
        """
        Select a device: reset per-device state and fetch immediately.

        Returns:
            The task of the immediate fetch-and-render cycle
        """
        if self.fetch_in_flight:
            self._inflight.cancel()

        epoch = self.context.session.select(device_id)
        self.context.reset_for_device()
        self._apply_sound(self.context.alarms.decision())
        self._redraw(force=True)

        return self._launch_fetch(device_id, epoch)

    def apply_reading(self, device_id: str, epoch: int, reading: Reading) -> bool:
        """
        Apply a fetched reading: display, buffer, alarms, then connectivity.

        Everything is computed before any state changes, so a failure leaves
        the dashboard exactly as it was.

        Returns:
            False if the reading belongs to a superseded selection and was dropped

        Raises:
            MalformedReadingError: If the reading reports another device
        """
        ctx = self.context
        if not ctx.session.is_current(device_id, epoch):
            logger.debug(
                f"Dropping stale reading for {device_id} "
                f"(epoch {epoch}, current {ctx.session.selected_device_id}@{ctx.session.epoch})"
            )
            return False

        reading.ensure_device(device_id)
        received_at = self.clock()
        violations = self.evaluator.evaluate(reading, self.thresholds.load())
        display_values = format_reading(reading)
        sample = sample_from_reading(reading, received_at=received_at)

        ctx.buffer.push(sample)
        ctx.display_values = display_values
        self._apply_sound(ctx.alarms.update(violations))

        ctx.last_reading = reading
        ctx.last_update = received_at
        self._set_connectivity(Connectivity.ONLINE)

        if self.redraw_interval_s is None:
            self._redraw()
        return True

    def mute(self) -> AlarmDecision:
        decision = self.context.alarms.mute()
        if self.sound is not None:
            self.sound.stop()
        return decision

    def unmute(self) -> AlarmDecision:
        decision = self.context.alarms.unmute()
        self._apply_sound(decision)
        return decision

    def state(self) -> DashboardState:
        return self.context.to_state()

    def _launch_fetch(self, device_id: str, epoch: int) -> asyncio.Task:
        task = asyncio.create_task(self._fetch_and_apply(device_id, epoch), name=f"monitor:fetch:{device_id}")
        self._inflight = task
        task.add_done_callback(self._on_fetch_done)
        return task

    def _on_fetch_done(self, task: asyncio.Task) -> None:
        if self._inflight is task:
            self._inflight = None
        if not task.cancelled() and task.exception() is not None:
            logger.opt(exception=task.exception()).error(f"Fetch cycle {task.get_name()} crashed")

    async def _fetch_and_apply(self, device_id: str, epoch: int) -> None:
        with LoggingContext(device_id=device_id):
            try:
                reading = (await self.source.fetch_latest(device_id)).ensure_device(device_id)
            except ReadingError as e:
                if not self.context.session.is_current(device_id, epoch):
                    logger.debug(f"Ignoring failure of superseded fetch: {e.message}")
                    return
                logger.warning(f"Latest reading unavailable: {e.message}")
                self._set_connectivity(Connectivity.OFFLINE)
                return

            self.apply_reading(device_id, epoch, reading)

    async def _poll_timer(self) -> None:
        while True:
            await asyncio.sleep(self.interval_s)
            self.tick()

    async def _redraw_timer(self) -> None:
        while True:
            await asyncio.sleep(self.redraw_interval_s)
            self._redraw()

    def _redraw(self, force: bool = False) -> None:
        if self.renderer is None:
            return
        snapshot = self.context.buffer.snapshot()
        if snapshot.is_empty() and not force:
            return
        self.renderer.render(snapshot)

    def _apply_sound(self, decision: AlarmDecision) -> None:
        if self.sound is None:
            return
        if decision.should_play_sound:
            self.sound.play()
        elif decision.stop_sound:
            self.sound.stop()

    def _set_connectivity(self, connectivity: Connectivity) -> None:
        if self.context.connectivity != connectivity:
            logger.info(f"Connectivity: {self.context.connectivity.value} -> {connectivity.value}")
        self.context.connectivity = connectivity
