# uiauto_macos/properties.py
"""
@file properties.py
@brief Batched property reads for element references.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from . import scripts
from .element import BaseElementReference, ElementReference
from .exceptions import CrossProcessBatchError, ScriptResultError
from .interfaces import IScriptRunner

ElementLike = Union[ElementReference, BaseElementReference]


class PropertyFetcher:
    """
    Reads `properties` records of elements.

    Every call issues at most one external script, whatever the number of
    elements.
    """

    def __init__(self, runner: IScriptRunner, logger: Optional[logging.Logger] = None):
        self.runner = runner
        self.log = logger or logging.getLogger("uiauto_macos")

    def get_properties(self, element: ElementLike) -> Dict[str, Any]:
        """Property record of a single element."""
        return self.get_properties_batch([element])[0]

    def get_properties_batch(self, elements: Sequence[ElementLike]) -> List[Dict[str, Any]]:
        """
        Property records of several elements of the same process, in input order.

        @throws CrossProcessBatchError if the elements span processes
        @throws ScriptResultError if the result does not match the request
        """
        elements = list(elements)
        if not elements:
            return []

        processes: List[str] = []
        for element in elements:
            if element.application_process not in processes:
                processes.append(element.application_process)
        if len(processes) > 1:
            raise CrossProcessBatchError(processes)

        self.log.debug("Fetching properties of %d element(s) in %r", len(elements), processes[0])
        raw = self.runner.tell_process(
            processes[0],
            scripts.properties_query([e.path_string for e in elements]),
        )
        return _demarshal(raw, len(elements))


def _demarshal(raw: Any, expected: int) -> List[Dict[str, Any]]:
    if not isinstance(raw, list) or len(raw) != expected:
        got = len(raw) if isinstance(raw, list) else type(raw).__name__
        raise ScriptResultError(
            f"Expected a list of {expected} property record(s), got {got}",
            raw=raw,
        )
    records: List[Dict[str, Any]] = []
    for i, item in enumerate(raw):
        if item == []:
            item = {}
        if not isinstance(item, dict):
            raise ScriptResultError(
                f"Property result #{i} is not a record: {item!r}",
                raw=raw,
            )
        records.append(item)
    return records
