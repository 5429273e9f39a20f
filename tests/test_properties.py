# tests/test_properties.py
"""
Tests for batched property reads.
"""

import pytest

from uiauto_macos.element import create_base_element_reference, create_element_references
from uiauto_macos.exceptions import CrossProcessBatchError, ScriptResultError
from uiauto_macos.properties import PropertyFetcher

from tests.fakes import FINDER, FakeRunner


OK = f'button "OK" of window 1 of {FINDER}'
CANCEL = f'button "Cancel" of window 1 of {FINDER}'
DOCK = 'list 1 of application process "Dock" of application "System Events"'


class TestGetPropertiesBatch:
    """Tests for PropertyFetcher.get_properties_batch."""

    def test_empty_batch_makes_no_call(self):
        runner = FakeRunner()
        assert PropertyFetcher(runner).get_properties_batch([]) == []
        assert runner.calls == []

    def test_one_call_in_input_order(self):
        runner = FakeRunner([[{"name": "Cancel"}, {"name": "OK"}]])
        cancel, ok = create_element_references([CANCEL, OK])

        result = PropertyFetcher(runner).get_properties_batch([cancel, ok])

        assert result == [{"name": "Cancel"}, {"name": "OK"}]
        assert len(runner.calls) == 1
        script = runner.scripts[0]
        assert 'tell process "Finder"' in script
        assert script.index(f"get properties of {CANCEL}") < script.index(f"get properties of {OK}")

    def test_cross_process_batch_is_rejected(self):
        runner = FakeRunner()
        elements = create_element_references([OK, DOCK])

        with pytest.raises(CrossProcessBatchError) as exc_info:
            PropertyFetcher(runner).get_properties_batch(elements)

        assert exc_info.value.processes == ["Finder", "Dock"]
        assert runner.calls == []

    def test_accepts_base_references(self):
        runner = FakeRunner([[{"role": "AXButton"}]])
        base = create_base_element_reference(OK)
        assert PropertyFetcher(runner).get_properties_batch([base]) == [{"role": "AXButton"}]

    def test_empty_record_becomes_dict(self):
        runner = FakeRunner([[[], {"name": "OK"}]])
        result = PropertyFetcher(runner).get_properties_batch(create_element_references([CANCEL, OK]))
        assert result == [{}, {"name": "OK"}]

    def test_length_mismatch(self):
        runner = FakeRunner([[{"name": "OK"}]])
        with pytest.raises(ScriptResultError):
            PropertyFetcher(runner).get_properties_batch(create_element_references([CANCEL, OK]))

    def test_non_record_item(self):
        runner = FakeRunner([["button"]])
        with pytest.raises(ScriptResultError):
            PropertyFetcher(runner).get_properties_batch(create_element_references([OK]))


class TestGetProperties:
    """Tests for the single-element form."""

    def test_unwraps_single_record(self):
        runner = FakeRunner([[{"name": "OK", "enabled": True}]])
        ok = create_element_references([OK])[0]

        assert PropertyFetcher(runner).get_properties(ok) == {"name": "OK", "enabled": True}
        assert len(runner.calls) == 1
        assert f"get properties of {OK}" in runner.scripts[0]
