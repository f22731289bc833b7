r"""Paths of the target collection and target endpoints.

Templates use ``{tc_id}`` and ``{target_id}`` placeholders that are
substituted by ``resolve_path`` before a request is built.
"""

from __future__ import annotations

__all__ = [
    "PATH_ADD_TARGET",
    "PATH_ADD_TARGETS",
    "PATH_ADD_TC",
    "PATH_GENERATE_TC",
    "PATH_GET_TARGET",
    "PATH_GET_TC",
    "resolve_path",
]

import string
from urllib.parse import quote

PATH_ADD_TC = "/cloudrecognition/targetCollection"
PATH_GET_TC = PATH_ADD_TC + "/{tc_id}"
PATH_GENERATE_TC = PATH_GET_TC + "/generation/cloudarchive"

PATH_ADD_TARGET = PATH_GET_TC + "/target"
PATH_ADD_TARGETS = PATH_GET_TC + "/targets"
PATH_GET_TARGET = PATH_ADD_TARGET + "/{target_id}"


def resolve_path(template: str, **ids: str) -> str:
    """Substitute the identifiers of a path template.

    Identifiers are percent-encoded so that they always stay within one
    path segment.

    Args:
        template: The path template.
        **ids: The value of each placeholder of the template.

    Returns:
        The resolved path.

    Raises:
        ValueError: If a placeholder has no value or a value is empty.

    Example:
        ```pycon
        >>> from cloudtargets.endpoints import PATH_GET_TARGET, resolve_path
        >>> resolve_path(PATH_GET_TARGET, tc_id="abc", target_id="t 1")
        '/cloudrecognition/targetCollection/abc/target/t%201'

        ```
    """
    names = {name for _, name, _, _ in string.Formatter().parse(template) if name}
    missing = names.difference(ids)
    if missing:
        msg = f"missing value for placeholder(s) {sorted(missing)} of {template}"
        raise ValueError(msg)
    for name in names:
        if not ids[name]:
            msg = f"{name} must be a non-empty string, got {ids[name]!r}"
            raise ValueError(msg)
    return template.format(**{name: quote(str(ids[name]), safe="") for name in names})
