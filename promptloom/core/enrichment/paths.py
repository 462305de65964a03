"""Path helpers for enrichment.

Pure string functions; nothing here touches the filesystem.
"""

import os


def strip_extension(path: str) -> str:
    """Return the basename of ``path`` without its final extension.

    ``"src/Button.tsx"`` -> ``"Button"``, ``"Button.test.tsx"`` -> ``"Button.test"``.
    Dotfiles keep their name (``".eslintrc"`` -> ``".eslintrc"``).
    """
    base = os.path.basename(path)
    stem, _ext = os.path.splitext(base)
    return stem


def relative_to_file(target_path: str, current_file: str) -> str:
    """Express ``target_path`` relative to the directory containing ``current_file``.

    Both paths are normalized lexically. When ``current_file`` has no
    directory component its directory is taken as ``"."``. An empty
    ``target_path`` is returned as-is.
    """
    if not target_path:
        return target_path
    start = os.path.dirname(current_file) or os.curdir
    return os.path.relpath(target_path, start)
