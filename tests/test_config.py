from abczed.config import MODE_LABELS, EditorMode, EditorSettings


def test_settings_defaults() -> None:
    settings = EditorSettings.from_env({})

    assert settings == EditorSettings()
    assert settings.trigger_timeout_ms == 500
    assert settings.page_rows == 20
    assert settings.command_history == 10


def test_settings_read_prefixed_environment() -> None:
    settings = EditorSettings.from_env(
        {
            "ABCZED_TRIGGER_TIMEOUT_MS": "250",
            "ABCZED_PAGE_ROWS": "40",
            "ABCZED_COMMAND_HISTORY": "3",
        }
    )

    assert settings == EditorSettings(
        trigger_timeout_ms=250, page_rows=40, command_history=3
    )


def test_settings_fall_back_on_bad_values() -> None:
    settings = EditorSettings.from_env(
        {
            "ABCZED_TRIGGER_TIMEOUT_MS": "soon",
            "ABCZED_PAGE_ROWS": "0",
            "ABCZED_COMMAND_HISTORY": "-3",
        }
    )

    assert settings == EditorSettings()


def test_every_mode_has_a_label() -> None:
    assert set(MODE_LABELS) == set(EditorMode)


def test_settings_default_to_process_environment(monkeypatch) -> None:
    monkeypatch.setenv("ABCZED_PAGE_ROWS", "7")
    monkeypatch.delenv("ABCZED_TRIGGER_TIMEOUT_MS", raising=False)

    settings = EditorSettings.from_env()

    assert settings.page_rows == 7
    assert settings.trigger_timeout_ms == 500
