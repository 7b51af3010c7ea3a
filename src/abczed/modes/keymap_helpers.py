"""Keymap-driven mode base class and token helpers."""

from __future__ import annotations

from typing import List, Optional

from abczed.keymaps import GLOBAL_LAYER, KeymapResolver, ResolutionMatch
from abczed.keymaps.models import normalize_modifiers
from abczed.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult


def key_to_token(key: KeyInput) -> str:
    modifiers = normalize_modifiers(key.modifiers)
    if modifiers:
        return "+".join(modifiers + (key.key,))
    return key.key


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


def is_printable(key: KeyInput) -> bool:
    """True for plain character keys (and Tab) that should be typed as text."""

    if not key.text or len(key.text) != 1:
        return False
    if "ctrl" in normalize_modifiers(key.modifiers):
        return False
    return key.text == "\t" or key.text.isprintable()


class KeymapMode(Mode):
    """Resolves keys against the mode's layer, then the global layer.

    Keys that only form a prefix of a longer binding (``c`` of ``c c``) are
    held as pending and reported to the manager with a timeout. If the next
    key does not extend the prefix, the held keys are dropped and that key is
    dispatched on its own.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        default_pending_timeout_ms: Optional[int] = None,
    ) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger(f"abczed.modes.{self.name}")
        self._resolver = require_keymap_resolver(context)
        self._pending: List[str] = []
        self._default_timeout_ms = (
            default_pending_timeout_ms or context.settings.trigger_timeout_ms
        )

    @property
    def layers(self) -> tuple[str, ...]:
        return (self.name, GLOBAL_LAYER)

    @property
    def pending_keys(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def on_exit(self, next_mode: Optional[str]) -> None:
        del next_mode
        self._pending.clear()

    def handle_key(self, key: KeyInput) -> ModeResult:
        token = key_to_token(key)
        self._pending.append(token)
        result = self._resolver.resolve_layers(self.layers, tuple(self._pending))

        if result.status == "match" and result.match:
            self._pending.clear()
            return self._execute_match(result.match)

        if result.status == "pending":
            return ModeResult(
                consumed=True,
                status="pending",
                message="awaiting_sequence",
                timeout_ms=result.timeout_ms or self._default_timeout_ms,
            )

        if len(self._pending) > 1:
            self.logger.debug(
                f"dropping {' '.join(self._pending[:-1])}; replaying {token}"
            )
            self._pending.clear()
            return self.handle_key(key)

        self._pending.clear()
        return self.handle_unbound(key)

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        del key
        return ModeResult(consumed=False, status="miss", message="unhandled")

    def handle_timeout(self) -> ModeResult:
        if not self._pending:
            return ModeResult(consumed=False, status="timeout")

        tokens = tuple(self._pending)
        self._pending.clear()
        result = self._resolver.resolve_layers(self.layers, tokens)
        if result.status == "match" and result.match:
            return self._execute_match(result.match)
        return ModeResult(consumed=False, status="timeout", message="pending_timeout")

    def _execute_match(self, match: ResolutionMatch) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={
                "binding_id": match.binding.id,
                "action": match.action.telemetry_name,
            },
        ):
            outcome = match.action(self.context, match)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)


__all__ = [
    "KeymapMode",
    "is_printable",
    "key_to_token",
    "require_keymap_resolver",
]
