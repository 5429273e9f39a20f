# uiauto_macos/__init__.py
"""
UIAuto macOS - System Events element addressing and waits.

This package provides:
- Path model: parse/serialize System Events element paths
- Element references: batch-bound, immutable element handles
- Waits: polling with timeout and cancellation
- Resolver: enumeration, existence and matcher waits
- Properties: batched property reads
- OsaScriptRunner: the osascript-backed script runner
"""

from uiauto_macos.config import TimeConfig, TimeoutSettings
from uiauto_macos.element import (
    BaseElementReference,
    ElementReference,
    create_base_element_reference,
    create_element_references,
)
from uiauto_macos.exceptions import (
    Cancelled,
    ConfigError,
    CrossProcessBatchError,
    MalformedPathError,
    PollTimeoutError,
    ScriptExecutionError,
    ScriptResultError,
    UIAutoError,
)
from uiauto_macos.interfaces import IScriptRunner
from uiauto_macos.osascript import OsaScriptRunner
from uiauto_macos.path import PathSegment, parse_path, serialize_path
from uiauto_macos.properties import PropertyFetcher
from uiauto_macos.resolver import ElementResolver
from uiauto_macos.waits import CancelToken, poll_until, poll_until_not

__all__ = [
    "TimeConfig",
    "TimeoutSettings",
    "BaseElementReference",
    "ElementReference",
    "create_base_element_reference",
    "create_element_references",
    "Cancelled",
    "ConfigError",
    "CrossProcessBatchError",
    "MalformedPathError",
    "PollTimeoutError",
    "ScriptExecutionError",
    "ScriptResultError",
    "UIAutoError",
    "IScriptRunner",
    "OsaScriptRunner",
    "PathSegment",
    "parse_path",
    "serialize_path",
    "PropertyFetcher",
    "ElementResolver",
    "CancelToken",
    "poll_until",
    "poll_until_not",
]

__version__ = "1.0.0"
