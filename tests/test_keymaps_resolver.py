from __future__ import annotations

from abczed.keymaps import (
    GLOBAL_LAYER,
    ActionRef,
    Binding,
    KeySequence,
    KeymapRegistry,
    KeymapResolver,
)


def make_action(action_id: str) -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    binding_id: str,
    *,
    mode: str = "normal",
    keys: tuple[str, ...] = ("c", "c"),
    action_id: str = "core.test",
    timeout_ms: int = 1000,
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=KeySequence.from_strings(*keys, timeout_ms=timeout_ms),
        action_id=action_id,
    )


def build_registry(bindings: list[Binding]) -> KeymapRegistry:
    registry = KeymapRegistry()
    action_ids = {binding.action_id for binding in bindings}
    for action_id in action_ids:
        registry.register_action(make_action(action_id))
    for binding in bindings:
        registry.register_binding(binding)
    return registry


def test_resolver_matches_exact_sequence() -> None:
    binding = make_binding("normal.cc")
    registry = build_registry([binding])
    resolver = KeymapResolver(registry)

    result = resolver.resolve("normal", ("c", "c"))

    assert result.status == "match"
    assert result.match is not None
    assert result.match.binding.id == binding.id
    assert result.consumed == 2
    assert result.layer == "normal"


def test_resolver_reports_pending_for_prefix() -> None:
    binding = make_binding("normal.cc")
    registry = build_registry([binding])
    resolver = KeymapResolver(registry)

    result = resolver.resolve("normal", ("c",))

    assert result.status == "pending"
    assert result.next_expected == ("c",)


def test_resolver_misses_on_divergent_sequence() -> None:
    registry = build_registry([make_binding("normal.cc")])
    resolver = KeymapResolver(registry)

    result = resolver.resolve("normal", ("c", "x"))

    assert result.status == "miss"
    assert result.consumed == 1


def test_resolver_empty_tokens_is_a_miss() -> None:
    registry = build_registry([make_binding("normal.cc")])
    resolver = KeymapResolver(registry)

    assert resolver.resolve("normal", ()).status == "miss"


def test_resolver_pending_returns_timeout_hint() -> None:
    binding = make_binding("normal.cc", timeout_ms=1500)
    registry = build_registry([binding])
    resolver = KeymapResolver(registry)

    result = resolver.resolve("normal", ("c",))

    assert result.status == "pending"
    assert result.timeout_ms == 1500


def test_resolver_pending_timeout_uses_shortest_continuation() -> None:
    registry = build_registry(
        [
            make_binding("normal.dd", keys=("d", "d"), timeout_ms=800),
            make_binding("normal.dw", keys=("d", "w"), timeout_ms=300),
        ]
    )
    resolver = KeymapResolver(registry)

    result = resolver.resolve("normal", ("d",))

    assert result.next_expected == ("d", "w")
    assert result.timeout_ms == 300


def test_resolver_layers_prefer_mode_over_global() -> None:
    registry = build_registry(
        [
            make_binding("normal.z", keys=("ctrl+z",), action_id="core.mode"),
            make_binding(
                "global.z", mode=GLOBAL_LAYER, keys=("ctrl+z",), action_id="core.global"
            ),
            make_binding(
                "global.y", mode=GLOBAL_LAYER, keys=("ctrl+y",), action_id="core.global"
            ),
        ]
    )
    resolver = KeymapResolver(registry)

    local = resolver.resolve_layers(("normal", GLOBAL_LAYER), ("ctrl+z",))
    fallback = resolver.resolve_layers(("normal", GLOBAL_LAYER), ("ctrl+y",))
    miss = resolver.resolve_layers(("normal", GLOBAL_LAYER), ("q",))

    assert local.match is not None and local.match.binding.id == "normal.z"
    assert fallback.match is not None and fallback.match.binding.id == "global.y"
    assert fallback.layer == GLOBAL_LAYER
    assert miss.status == "miss"


def test_resolver_cache_refreshes_on_revision() -> None:
    registry = build_registry([])
    resolver = KeymapResolver(registry)

    miss = resolver.resolve("normal", ("x",))
    assert miss.status == "miss"

    new_binding = make_binding("normal.x", keys=("x",), action_id="core.x")
    registry.register_action(make_action("core.x"))
    registry.register_binding(new_binding)

    match = resolver.resolve("normal", ("x",))
    assert match.status == "match"
    assert match.match is not None
    assert match.match.binding.id == new_binding.id
