"""Tests for the GUI stylesheet (no QApplication needed)."""

import pytest

styles = pytest.importorskip("graddesc.ui.styles")


def test_stylesheet_covers_app_widgets():
    css = styles.build_stylesheet()

    assert f"QCheckBox#{styles.PICK_TOGGLE}:checked" in css
    assert f"QPushButton#{styles.SECONDARY_BUTTON}" in css
    assert f'QLabel[role="{styles.ROLE_WARN}"]' in css
    assert "#plotView" in css
    assert styles.THEME.warn in css


def test_stylesheet_follows_theme():
    theme = styles.DescentTheme(accent="#123456")
    css = styles.build_stylesheet(theme)

    assert "#123456" in css
    assert styles.THEME.accent not in css
