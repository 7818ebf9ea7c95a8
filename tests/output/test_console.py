"""Tests for the Rich console helpers."""

from __future__ import annotations

import pytest
from rich.console import Console

from walidator.output.console import DEFAULT_WIDTH, WALIDATOR_THEME, create_console, kind_style, rendered_text


class TestConsole:
    def test_renders_to_memory(self) -> None:
        console = create_console(no_color=True)
        console.print("[wal.ok]OK[/]")
        console.print("second line")
        assert rendered_text(console) == "OK\nsecond line"

    def test_width(self) -> None:
        assert create_console().width == DEFAULT_WIDTH
        assert create_console(width=40).width == 40

    def test_emoji_codes_left_alone(self) -> None:
        console = create_console(no_color=True)
        console.print("rule :x: failed")
        assert rendered_text(console) == "rule :x: failed"

    def test_foreign_console_rejected(self) -> None:
        with pytest.raises(TypeError):
            rendered_text(Console())


class TestKindStyle:
    @pytest.mark.parametrize("kind", ["required", "zero_value", "invalid", "regexp", "len"])
    def test_violations(self, kind: str) -> None:
        assert kind_style(kind) == "wal.violation"

    @pytest.mark.parametrize("kind", ["unsupported", "bad_parameter", "unknown_tag", "something-else"])
    def test_usage_and_unknown(self, kind: str) -> None:
        assert kind_style(kind) == "wal.usage"

    def test_styles_exist_in_theme(self) -> None:
        assert {"wal.violation", "wal.usage", "wal.path", "wal.rule"} <= set(WALIDATOR_THEME.styles)
