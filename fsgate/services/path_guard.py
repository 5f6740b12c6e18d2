from __future__ import annotations

import os
from pathlib import Path

from ..config import GatewayRoot
from ..errors import AccessDenied

_SEPARATORS = '/' + os.sep + (os.altsep or '')


def _normalize(path: str) -> str:
    return os.path.normpath(path)


def validate_path(requested_path: str, root: GatewayRoot | Path | str) -> Path:
    """Resolve ``requested_path`` against ``root`` lexically and prove containment.

    Leading separators are stripped so absolute-looking input is joined with the
    root rather than replacing it. Only the normalized prefix comparison decides
    containment; symlinks are not dereferenced.
    """
    base = _normalize(str(root))
    candidate = _normalize(os.path.join(base, requested_path.lstrip(_SEPARATORS)))

    prefix = base if base.endswith(os.sep) else base + os.sep
    if candidate != base and not candidate.startswith(prefix):
        raise AccessDenied(f"Access denied: Path '{requested_path}' resolves outside the allowed directory.")
    return Path(candidate)


class PathGuard:
    def __init__(self, root: GatewayRoot):
        self.root = root

    def resolve(self, requested_path: str) -> Path:
        return validate_path(requested_path, self.root)
