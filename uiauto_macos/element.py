# uiauto_macos/element.py
"""
@file element.py
@brief Element references bound to their position in an enumeration batch.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .path import APPLICATION, APPLICATION_PROCESS, PathSegment, find_segment, parse_path


@dataclass(frozen=True)
class BaseElementReference:
    """
    Immutable value parsed from one raw path string.

    `application` and `application_process` are the names of the first
    segments of those types in `path`.
    """
    application: str
    application_process: str
    path: Tuple[PathSegment, ...]
    path_string: str

    def __str__(self) -> str:
        return self.path_string


def create_base_element_reference(path_string: str) -> BaseElementReference:
    """
    @throws MalformedPathError if path_string is not a full element path
    """
    segments = parse_path(path_string)
    return BaseElementReference(
        application=find_segment(segments, APPLICATION).name,
        application_process=find_segment(segments, APPLICATION_PROCESS).name,
        path=tuple(segments),
        path_string=path_string,
    )


class ElementReference:
    """
    Reference to one element among the siblings produced by a single
    enumeration of the UI tree.

    The batch is shared read-only by every reference created with it.
    Equality is positional: two references are equal when they come from
    the same batch and carry the same index. Use `same_path` for the weaker
    textual comparison.

    References go stale as soon as the UI changes; re-enumerate instead of
    holding them across UI transitions.
    """

    __slots__ = ("_base_elements", "_element_index")

    def __init__(self, base_elements: Tuple[BaseElementReference, ...], element_index: int):
        """
        @param base_elements Shared batch of parsed references
        @param element_index Position of this element in the batch
        """
        if not 0 <= element_index < len(base_elements):
            raise IndexError(
                f"element_index {element_index} out of range for batch of {len(base_elements)}"
            )
        self._base_elements = base_elements
        self._element_index = element_index

    @classmethod
    def create(cls, path_strings: Iterable[str]) -> List[ElementReference]:
        """Parse all path strings into one batch and return a reference per entry."""
        batch = tuple(create_base_element_reference(s) for s in path_strings)
        return [cls(batch, i) for i in range(len(batch))]

    @property
    def base_elements(self) -> Tuple[BaseElementReference, ...]:
        return self._base_elements

    @property
    def element_index(self) -> int:
        return self._element_index

    @property
    def base(self) -> BaseElementReference:
        return self._base_elements[self._element_index]

    @property
    def application(self) -> str:
        return self.base.application

    @property
    def application_process(self) -> str:
        return self.base.application_process

    @property
    def path(self) -> Tuple[PathSegment, ...]:
        return self.base.path

    @property
    def path_string(self) -> str:
        return self.base.path_string

    def same_path(self, other: object) -> bool:
        """True if other addresses the same path text, regardless of batch."""
        other_path = getattr(other, "path_string", None)
        return other_path is not None and other_path == self.path_string

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ElementReference):
            return NotImplemented
        return (
            self._base_elements is other._base_elements
            and self._element_index == other._element_index
        )

    def __hash__(self) -> int:
        return hash((id(self._base_elements), self._element_index))

    def __str__(self) -> str:
        return self.path_string

    def __repr__(self) -> str:
        return f"ElementReference(index={self._element_index}, path={self.path_string!r})"


def create_element_references(path_strings: Iterable[str]) -> List[ElementReference]:
    """
    Batch constructor: one shared batch, one ElementReference per input.

    @throws MalformedPathError on the first unparseable path
    """
    return ElementReference.create(path_strings)
