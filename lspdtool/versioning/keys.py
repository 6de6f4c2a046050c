# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Core version type for lspdtool.

This module is format-agnostic: it does NOT read archives. It only parses
and compares the loosely formatted version strings used for Snort releases
and LightSPD directory names (e.g. "3.1.0.0", "3.0.0-268", "3.1.74.0-1").
"""

from __future__ import annotations

from dataclasses import astuple, dataclass
import re

from lspdtool.exceptions import InvalidVersionString

# ----------------------------
# Value type
# ----------------------------

FIELD_MAX = 2**32 - 1
MAX_FIELDS = 5

_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True, order=True)
class Version:
    """Five-field version value with field-precedence ordering.

    Comparison is lexicographic over (major, minor, patch, build, revision),
    which the dataclass ordering provides directly.

    Attributes:
        major: Major version.
        minor: Minor version.
        patch: Patch version.
        build: Build number (shown only when non-zero).
        revision: Revision after the dash (shown only when non-zero).

    """

    major: int = 0
    minor: int = 0
    patch: int = 0
    build: int = 0
    revision: int = 0

    def is_any(self) -> bool:
        """Return True for the all-zero "any" sentinel."""
        return self == ANY

    def in_range(self) -> bool:
        """Return True if every field fits in 0..FIELD_MAX."""
        return all(0 <= field <= FIELD_MAX for field in astuple(self))

    def __str__(self) -> str:
        if self.is_any():
            return "any"
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.build > 0:
            text += f".{self.build}"
        if self.revision > 0:
            text += f"-{self.revision}"
        return text


# Not subject to version filtering; always retained.
ANY = Version()

# Strictly greater than anything parse_version() can produce, so the
# regular greater-than-target cutoff drops it for every target.
FORCE_DISCARD = Version(FIELD_MAX + 1, 0, 0, 0, 0)


# ----------------------------
# Parsing
# ----------------------------


def _split_fields(text: str) -> list[str]:
    """Split on '.', padding to four fields when a '-' opens the revision."""
    fields: list[str] = []
    current = ""
    for ch in text:
        if ch == ".":
            fields.append(current)
            current = ""
        elif ch == "-":
            fields.append(current)
            current = ""
            while len(fields) < 4:
                fields.append("0")
        else:
            current += ch
    fields.append(current)
    return fields


def _field_value(field: str, text: str, strict: bool) -> int:
    if field == "":
        return 0
    if _DIGITS.fullmatch(field):
        value = int(field)
        if value <= FIELD_MAX:
            return value
        if strict:
            raise InvalidVersionString(
                f"version component {field!r} out of range in {text!r}"
            )
        return 0
    if strict:
        raise InvalidVersionString(f"non-numeric version component {field!r} in {text!r}")
    return 0


def parse_version(text: str, *, strict: bool = False) -> Version:
    """Parse a version string into a Version.

    Grammar: fields are separated by '.'. A '-' ends the current field and,
    if fewer than four fields exist, pads with zeros so that the next field
    is the revision. Missing fields default to zero.

    Args:
        text: Version string such as "3.1.0.0", "3.0.0-268" or "stubs".
        strict: If True, a non-numeric or out-of-range field raises.
            If False (default), such a field is read as zero, so directory
            names like "stubs" parse to the "any" sentinel.

    Returns:
        The parsed Version.

    Raises:
        InvalidVersionString: More than five fields, or a bad field in
            strict mode.

    Example:
        ```python
        parse_version("1.2.3-5")        # Version(1, 2, 3, 0, 5)
        parse_version("stubs").is_any() # True
        ```

    """
    fields = _split_fields(text)
    if len(fields) > MAX_FIELDS:
        raise InvalidVersionString(
            f"too many version components ({len(fields)} > {MAX_FIELDS}) in {text!r}"
        )

    values = [_field_value(f, text, strict) for f in fields]
    values += [0] * (MAX_FIELDS - len(values))
    return Version(*values)
