# tests/test_values.py
"""
Tests for decoding AppleScript source-form output.
"""

import pytest

from uiauto_macos.exceptions import ScriptResultError
from uiauto_macos.values import parse_applescript_value


class TestScalars:
    """Tests for scalar values."""

    @pytest.mark.parametrize("text,expected", [
        ('"hello"', "hello"),
        (r'"say \"hi\""', 'say "hi"'),
        ("42", 42),
        ("-3", -3),
        ("1.5", 1.5),
        ("1.0E+5", 100000.0),
        ("true", True),
        ("false", False),
        ("missing value", None),
        ("", None),
    ])
    def test_scalar(self, text, expected):
        assert parse_applescript_value(text) == expected

    def test_bare_specifier_is_text(self):
        text = 'button "OK" of window 1 of application process "Finder" of application "System Events"'
        assert parse_applescript_value(text + "\n") == text

    def test_date_is_text(self):
        assert parse_applescript_value('date "Monday, 1 June 2026"') == 'date "Monday, 1 June 2026"'


class TestCollections:
    """Tests for lists and records."""

    def test_list_of_specifiers(self):
        text = (
            '{window "A" of application process "Finder" of application "System Events", '
            'button "x, y" of window "A" of application process "Finder" of application "System Events"}'
        )
        result = parse_applescript_value(text)
        assert len(result) == 2
        assert result[1].startswith('button "x, y" of window')

    def test_record(self):
        text = (
            '{class:button, name:"OK", enabled:true, position:{10, 20}, '
            'minimum value:missing value, |my key|:"v", «class AXid»:"abc"}'
        )
        assert parse_applescript_value(text) == {
            "class": "button",
            "name": "OK",
            "enabled": True,
            "position": [10, 20],
            "minimum value": None,
            "my key": "v",
            "«class AXid»": "abc",
        }

    def test_list_of_records(self):
        result = parse_applescript_value('{{name:"A"}, {name:"B", size:{1, 2}}}')
        assert result == [{"name": "A"}, {"name": "B", "size": [1, 2]}]

    def test_empty_braces(self):
        assert parse_applescript_value("{}") == []
        assert parse_applescript_value("{{}, {}}") == [[], []]

    def test_record_value_containing_specifier(self):
        result = parse_applescript_value(
            '{focused:false, parent:window "Doc" of application process "TextEdit" of application "System Events"}'
        )
        assert result["parent"].startswith('window "Doc"')


class TestMalformed:
    """Tests for malformed output."""

    @pytest.mark.parametrize("text", ['"open', "{1, 2", "{a:1, 2}", "{1} junk", "{«class x:1}"])
    def test_raises(self, text):
        with pytest.raises(ScriptResultError) as exc_info:
            parse_applescript_value(text)
        assert exc_info.value.raw is not None
