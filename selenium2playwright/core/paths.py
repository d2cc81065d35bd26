"""
Source tree traversal and source-to-target path mapping.
"""

import os
import re
from pathlib import Path, PurePosixPath
from typing import Dict, Iterator, List, Tuple

PAGE_SUFFIX = re.compile(r"Page\.java$", re.I)
STEPS_SUFFIX = re.compile(r"Steps?\.java$", re.I)


def to_kebab_case(name: str) -> str:
    """
    Kebab-case a folder or file stem.

    Examples:
        "UserManagement" -> "user-management"
        "HTMLReports" -> "html-reports"
        "order_history.v2" -> "order-history-v2"
    """
    name = re.sub(r"([a-z0-9])([A-Z])", r"\1-\2", name)
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1-\2", name)
    name = re.sub(r"[\s._]+", "-", name)
    name = re.sub(r"-{2,}", "-", name)
    return name.strip("-").lower()


def map_segment(name: str, folder_mapping: Dict[str, str] = None) -> str:
    """Target name for one directory, honouring explicit folder mapping."""
    if folder_mapping and name in folder_mapping:
        return folder_mapping[name]
    return to_kebab_case(name)


def map_relative_dir(parts: Tuple[str, ...], folder_mapping: Dict[str, str] = None) -> Path:
    return Path(*[map_segment(part, folder_mapping) for part in parts]) if parts else Path()


def page_file_name(java_name: str) -> str:
    """LoginPage.java -> login.page.ts"""
    stem = PAGE_SUFFIX.sub("", java_name)
    return f"{to_kebab_case(stem) or 'index'}.page.ts"


def steps_file_name(java_name: str) -> str:
    """AccountSteps.java -> account.steps.ts"""
    stem = STEPS_SUFFIX.sub("", java_name)
    return f"{to_kebab_case(stem) or 'index'}.steps.ts"


def is_page_source(name: str) -> bool:
    return PAGE_SUFFIX.search(name) is not None


def is_steps_source(name: str) -> bool:
    return STEPS_SUFFIX.search(name) is not None


def walk_sorted(root: Path) -> Iterator[Tuple[Path, Tuple[str, ...]]]:
    """
    Walk a tree in sorted order.

    Yields:
        (file_path, relative_dir_parts) for every file under root
    """
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        relative = Path(dirpath).relative_to(root).parts
        for filename in sorted(filenames):
            yield Path(dirpath) / filename, relative


def subdirectories(root: Path) -> List[Tuple[str, ...]]:
    """Every directory below root as relative parts, sorted."""
    if not root.is_dir():
        return []
    found = []
    for dirpath, dirnames, _ in os.walk(root):
        dirnames.sort()
        for dirname in dirnames:
            found.append((Path(dirpath) / dirname).relative_to(root).parts)
    return found


def module_import(from_file: Path, to_file: Path) -> str:
    """
    TypeScript import specifier from one generated file to another.

    Examples:
        src/pages/admin/users.page.ts -> src/pages/base.page.ts gives "../base.page"
    """
    relative = PurePosixPath(os.path.relpath(to_file.with_suffix(""), from_file.parent).replace(os.sep, "/"))
    specifier = str(relative)
    if not specifier.startswith("."):
        specifier = f"./{specifier}"
    return specifier


def relative_to_root(path: Path, root: Path) -> str:
    """Path shown in reports: relative to root when possible, POSIX style."""
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()

