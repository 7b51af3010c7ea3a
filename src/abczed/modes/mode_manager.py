"""Mode manager owning the active mode, pending triggers, and key dispatch."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Type

from abczed.keymaps import KeymapRegistry, KeymapResolver
from abczed.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult

Clock = Callable[[], float]


@dataclass
class PendingTrigger:
    """Keys held by ``mode`` while waiting for the rest of a sequence."""

    mode: str
    keys: tuple[str, ...]
    deadline: float
    timeout_ms: int
    generation: int

    def expired(self, now: float) -> bool:
        return self.deadline <= now


class ModeManager:
    """Owns the active mode, handles transitions, and dispatches key events.

    A pending trigger is checked at the start of every ``handle_key`` call
    (and whenever a host calls ``process_timeouts``), so an expired prefix is
    abandoned before the next key is looked at.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        clock: Clock = time.monotonic,
    ) -> None:
        self.context = context
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self._clock = clock
        self.logger = telemetry.get_logger("abczed.modes")
        if keymap_registry is None:
            keymap_registry = KeymapRegistry(logger_name="abczed.keymaps")
        if keymap_resolver is None:
            keymap_resolver = KeymapResolver(
                keymap_registry, logger_name="abczed.keymaps"
            )
        self.keymap_registry = keymap_registry
        self.keymap_resolver = keymap_resolver
        self.context.extras.setdefault("keymap_resolver", self.keymap_resolver)
        self.pending: Optional[PendingTrigger] = None
        self._generation = 0

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    @property
    def active_name(self) -> Optional[str]:
        return self._active

    def get_mode(self, name: str) -> Mode:
        return self._modes[name]

    def register_mode(
        self,
        mode_cls: Type[Mode],
        /,
        *mode_args: object,
        **mode_kwargs: object,
    ) -> Mode:
        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self.active_mode
        if previous and previous.name == name:
            return
        self.cancel_trigger()
        if previous:
            previous.on_exit(name)
        self._active = name
        self._modes[name].on_enter(previous.name if previous else None)
        telemetry.record_event(
            "mode.switch",
            data={"mode": name, "previous": previous.name if previous else None},
        )

    def handle_key(self, key: KeyInput) -> ModeResult:
        self.process_timeouts()
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            name=f"mode::{mode.name}",
            component=True,
            metadata={"key": key.key, "mode": mode.name},
        ):
            result = mode.handle_key(key)
        return self._after_mode_result(mode, result)

    def _after_mode_result(self, mode: Mode, result: ModeResult) -> ModeResult:
        if result.timeout_ms and mode.pending_keys:
            self.arm_trigger(mode, result.timeout_ms)
        else:
            self.cancel_trigger()
        if result.switch_to:
            self.switch_mode(result.switch_to)
        return result

    def arm_trigger(self, mode: Mode, timeout_ms: int) -> PendingTrigger:
        self._generation += 1
        self.pending = PendingTrigger(
            mode=mode.name,
            keys=mode.pending_keys,
            deadline=self._clock() + (timeout_ms / 1000.0),
            timeout_ms=timeout_ms,
            generation=self._generation,
        )
        return self.pending

    def cancel_trigger(self) -> None:
        self.pending = None

    def process_timeouts(self) -> Dict[str, ModeResult]:
        """Expire the pending trigger if its deadline has passed."""

        trigger = self.pending
        if trigger is None or not trigger.expired(self._clock()):
            return {}
        return {trigger.mode: self._trigger_timeout(trigger)}

    def force_timeout(self) -> Dict[str, ModeResult]:
        trigger = self.pending
        if trigger is None:
            return {}
        return {trigger.mode: self._trigger_timeout(trigger)}

    def _trigger_timeout(self, trigger: PendingTrigger) -> ModeResult:
        current = self.pending
        if current is None or current.generation != trigger.generation:
            return ModeResult(consumed=False, status="timeout")
        self.pending = None
        mode = self._modes.get(trigger.mode)
        if mode is None:
            return ModeResult(consumed=False, status="timeout")
        with telemetry.span(
            name=f"mode_timeout::{trigger.mode}",
            component=True,
            metadata={"mode": trigger.mode, "keys": " ".join(trigger.keys)},
        ):
            result = mode.handle_timeout()
        return self._after_mode_result(mode, result)


__all__ = ["ModeManager", "PendingTrigger"]
