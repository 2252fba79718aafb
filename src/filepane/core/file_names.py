"""
Path helpers for browsed filesystems

Paths are plain strings because the browsed filesystem may be remote and
may use either '/' or '\\' as separator.
"""

SEPARATORS = ('/', '\\')


def _separator_for(path):
    """Guess the separator used by a path, defaulting to '/'"""
    if '/' not in path and '\\' in path:
        return '\\'
    return '/'


def normalize(path):
    """Strip trailing separators (but keep a bare root like '/' or 'C:\\')"""
    if not path:
        return path
    stripped = path.rstrip('/\\')
    if not stripped:
        return path[0]
    if stripped.endswith(':') and len(stripped) == 2:
        return stripped + path[len(stripped)]
    return stripped


def get_file_name(path):
    """Return the last path segment"""
    if not path:
        return ""
    stripped = path.rstrip('/\\')
    if not stripped:
        return ""
    index = max(stripped.rfind(sep) for sep in SEPARATORS)
    return stripped[index + 1:]


def get_parent(path):
    """Return the parent directory, or None for a root"""
    normalized = normalize(path)
    if not normalized:
        return None
    stripped = normalized.rstrip('/\\')
    index = max(stripped.rfind(sep) for sep in SEPARATORS)
    if index < 0:
        return None
    if index == 0:
        return normalized[0]
    parent = stripped[:index]
    if parent.endswith(':'):
        return parent + stripped[index]
    return parent


def join(parent, name):
    """Join a file name onto a directory path without doubling separators"""
    if not parent:
        return name
    sep = _separator_for(parent)
    if parent.endswith(SEPARATORS):
        return parent + name.lstrip('/\\')
    return parent + sep + name.lstrip('/\\')


def same_path(left, right):
    """Compare two paths treating '/' and '\\' as the same separator"""
    if left is None or right is None:
        return left is right
    return normalize(left).replace('\\', '/') == normalize(right).replace('\\', '/')
