"""
Version parsing and comparison for lspdtool.

This package provides the five-field Version value used both for the
caller's target Snort version and for the version directories inside a
LightSPD archive.

Modules
-------
keys : module
    The Version dataclass, its sentinels and the parser.

Public API
----------
Version : dataclass
    Immutable (major, minor, patch, build, revision) with total ordering.
ANY : Version
    All-zero sentinel; assets under it are exempt from version filtering.
FORCE_DISCARD : Version
    Sentinel greater than every parseable version.
parse_version : function
    Parse a loosely formatted version string.

Parsing Rules
-------------
- Fields are separated by '.'
- A '-' starts the revision field, zero-padding the fields before it:
  "3.0.0-268" -> (3, 0, 0, 0, 268)
- More than five fields is an error
- Non-numeric fields read as zero unless strict=True

Examples
--------
    >>> from lspdtool.versioning import parse_version
    >>> str(parse_version("3.1.0.0"))
    '3.1.0'
    >>> str(parse_version("3.0.0-268"))
    '3.0.0-268'
    >>> parse_version("3.1.0.0") > parse_version("3.0.0-268")
    True
    >>> str(parse_version("0"))
    'any'
"""

from .keys import ANY, FIELD_MAX, FORCE_DISCARD, Version, parse_version

__all__ = ["ANY", "FIELD_MAX", "FORCE_DISCARD", "Version", "parse_version"]
