import pytest

from abczed.keymaps import (
    GLOBAL_LAYER,
    ActionRef,
    Binding,
    KeySequence,
    KeymapConflictError,
    KeymapRegistry,
)
from abczed.keymaps.defaults import DEFAULT_BINDINGS, load_default_keymaps


def make_action(action_id: str = "core.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_sequence(*keys: str) -> KeySequence:
    return KeySequence.from_strings(*keys)


def make_binding(
    *,
    binding_id: str,
    mode: str = "normal",
    sequence: KeySequence | None = None,
    action_id: str = "core.test",
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=sequence or make_sequence("c", "c"),
        action_id=action_id,
    )


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    action = make_action()
    registry.register_action(action)
    binding = make_binding(binding_id="normal.cc")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings(mode="normal")) == [binding]


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    binding = make_binding(binding_id="normal.cc")
    registry.register_binding(binding)

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.register_binding(make_binding(binding_id="normal.cc.duplicate"))

    assert [conflict.id for conflict in excinfo.value.conflicts] == ["normal.cc"]


def test_same_sequence_in_different_layers_is_not_a_conflict() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    registry.register_binding(make_binding(binding_id="normal.cc"))
    registry.register_binding(make_binding(binding_id="insert.cc", mode="insert"))

    assert registry.stats().binding_count == 2
    assert registry.stats().modes == ("insert", "normal")


def test_replace_drops_conflicting_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="normal.cc"))

    replacement = make_binding(binding_id="normal.change")
    registry.register_binding(replacement, replace=True)

    assert list(registry.iter_bindings("normal")) == [replacement]
    with pytest.raises(KeyError):
        registry.get_binding("normal.cc")


def test_duplicate_binding_id_requires_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="normal.cc"))

    moved = make_binding(binding_id="normal.cc", sequence=make_sequence("d", "d"))
    with pytest.raises(ValueError):
        registry.register_binding(moved)

    registry.register_binding(moved, replace=True)
    assert [b.key_signature for b in registry.iter_bindings("normal")] == ["d d"]


def test_binding_requires_registered_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="normal.cc"))


def test_unregister_binding_bumps_revision() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="normal.cc"))
    revision = registry.revision()

    removed = registry.unregister_binding("normal.cc")

    assert removed is not None
    assert registry.revision() == revision + 1
    assert registry.unregister_binding("normal.cc") is None
    assert registry.stats().modes == ()


def test_override_sequence_timeouts_skips_single_strokes() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="normal.cc"))
    registry.register_binding(
        make_binding(binding_id="normal.x", sequence=make_sequence("x"))
    )

    registry.override_sequence_timeouts(timeout_ms=250, mode="normal")

    assert registry.get_binding("normal.cc").sequence.timeout_ms == 250
    assert registry.get_binding("normal.x").sequence.timeout_ms == 500

    with pytest.raises(ValueError):
        registry.override_sequence_timeouts(timeout_ms=0)


def test_chord_tokens_are_normalized() -> None:
    sequence = KeySequence.chord("z", "Ctrl")
    assert sequence.tokens == ("ctrl+z",)

    combo = KeySequence.chord("k", "shift", "ctrl")
    assert combo.tokens == ("ctrl+shift+k",)


def test_load_default_keymaps_registers_every_layer() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    stats = registry.stats()
    assert stats.binding_count == len(DEFAULT_BINDINGS)
    assert stats.modes == tuple(
        sorted((GLOBAL_LAYER, "normal", "insert", "selection", "command"))
    )


def test_load_default_keymaps_filters_and_timeout() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(
        registry,
        include_bindings=["normal.change_change", "normal.delete_char", "global.undo"],
        exclude_bindings=["normal.delete_char"],
        default_sequence_timeout_ms=900,
    )

    ids = sorted(binding.id for binding in registry.iter_bindings())
    assert ids == ["global.undo", "normal.change_change"]
    assert registry.get_binding("normal.change_change").sequence.timeout_ms == 900


def test_load_default_keymaps_extra_bindings_replace_defaults() -> None:
    registry = KeymapRegistry()
    custom = Binding(
        id="normal.custom_undo",
        mode="normal",
        sequence=make_sequence("u"),
        action_id="edit.undo",
    )

    load_default_keymaps(registry, extra_bindings=[custom])

    assert registry.get_binding("normal.custom_undo").action_id == "edit.undo"
