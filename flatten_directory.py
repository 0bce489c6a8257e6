# flatten_directory.py
"""
Collapses a nested directory tree into a single flat directory.

Every file found below the target root is moved (delete mode) or copied into
the root itself. Name collisions are either skipped or resolved by appending
a counter to the file stem, and in delete mode the emptied subdirectories are
removed bottom-up once all files have been relocated.
"""

import os
import shutil
from dataclasses import dataclass, field

from logger import setup_logger

__version__ = "0.1.0"


class FlattenError(RuntimeError):
    """Base class for errors that abort a flatten run."""


class SetupError(FlattenError):
    pass


class TraversalError(FlattenError):
    pass


class RelocationError(FlattenError):
    def __init__(self, message, source, destination):
        super().__init__(message)
        self.source = source
        self.destination = destination


class CleanupError(FlattenError):
    def __init__(self, message, directory):
        super().__init__(message)
        self.directory = directory


@dataclass(frozen=True)
class Options:
    target: str
    delete: bool = False
    rename: bool = False
    dry_run: bool = False

    @classmethod
    def from_settings(cls, settings):
        """Build run options from a merged settings dict (see app_settings.load_settings)."""
        target = settings.get("target")
        if not target:
            try:
                target = os.getcwd()
            except OSError as e:
                raise SetupError(f"Could not resolve the current directory: {e}")
        return cls(
            target=target,
            delete=bool(settings.get("delete", False)),
            rename=bool(settings.get("rename", False)),
            dry_run=bool(settings.get("dryRun", False)),
        )


@dataclass(frozen=True)
class Entry:
    path: str
    is_dir: bool
    depth: int


@dataclass
class FlattenResult:
    relocated: list = field(default_factory=list)  # (source, destination)
    skipped: list = field(default_factory=list)  # (source, existing destination)
    renamed: int = 0
    removed_dirs: list = field(default_factory=list)


def split_name(name):
    """
    Splits a file name into (stem, ext) where ext is the final dot-suffix
    including the dot, or "" when there is none.
    Example: archive.tar.gz -> ("archive.tar", ".gz"), .bashrc -> (".bashrc", "")
    """
    return os.path.splitext(name)


def candidate_name(name, counter):
    """Returns the collision candidate for name, e.g. ("report.pdf", 2) -> "report_2.pdf"."""
    stem, ext = split_name(name)
    return f"{stem}_{counter}{ext}"


def resolve_destination(root, name, rename, exists=os.path.lexists):
    """
    Works out where a file called `name` should land inside `root`.

    Returns (destination, renamed). destination is None when the name is taken
    and renaming is disabled. `exists` is the existence check, injected so
    collisions can be simulated without touching the disk.
    """
    destination = os.path.join(root, name)
    if not exists(destination):
        return destination, False
    if not rename:
        return None, False

    counter = 1
    while True:
        destination = os.path.join(root, candidate_name(name, counter))
        if not exists(destination):
            return destination, True
        counter += 1


def needs_relocation(entry, root):
    # Files sitting directly in the root are already flat
    return not entry.is_dir and os.path.dirname(entry.path) != root


def _raise_walk_error(error):
    raise error


def iter_entries(root):
    """
    Lazily walks `root` depth-first, yielding an Entry for every directory and
    file below it. Siblings are visited in sorted order so a given tree is always
    walked the same way. Symlinked directories are not descended and come back
    as file entries.
    """
    logger = setup_logger()
    walker = os.walk(root, topdown=True, onerror=_raise_walk_error)
    try:
        for dirpath, dirnames, filenames in walker:
            depth = 0 if dirpath == root else os.path.relpath(dirpath, root).count(os.sep) + 1

            linked = [d for d in dirnames if os.path.islink(os.path.join(dirpath, d))]
            dirnames[:] = sorted(d for d in dirnames if d not in linked)

            for name in sorted(filenames + linked):
                yield Entry(os.path.join(dirpath, name), False, depth + 1)
            for name in dirnames:
                yield Entry(os.path.join(dirpath, name), True, depth + 1)
    except OSError as e:
        logger.critical(f"Failed to read directory {e.filename}: {e.strerror or e}")
        raise TraversalError(f"Failed to read directory {e.filename}: {e.strerror or e}")


def relocate(source, destination, delete):
    """Moves (delete=True) or copies source to destination."""
    logger = setup_logger()
    action = "move" if delete else "copy"
    try:
        if delete:
            # Plain rename, no cross-device copy fallback
            os.rename(source, destination)
        elif os.path.islink(source) and (os.path.isdir(source) or not os.path.exists(source)):
            shutil.copy2(source, destination, follow_symlinks=False)
        else:
            shutil.copy2(source, destination)
    except OSError as e:
        logger.critical(f"Failed to {action} {source} -> {destination}: {e}")
        raise RelocationError(f"Failed to {action} {source} -> {destination}: {e}", source, destination)
    logger.debug(f"{'Moved' if delete else 'Copied'}: {source} -> {destination}")


def remove_empty_dirs(directories, root):
    """
    Removes `directories` deepest first. Each one must already be empty by the
    time its turn comes; anything else is a CleanupError.
    """
    logger = setup_logger()
    removed = []
    for directory in sorted(directories, key=lambda d: d.count(os.sep), reverse=True):
        if directory == root:
            continue
        try:
            os.rmdir(directory)
        except OSError as e:
            logger.critical(f"Failed to remove directory {directory}: {e}")
            raise CleanupError(f"Failed to remove directory {directory}: {e}", directory)
        logger.debug(f"Removed empty folder: {directory}")
        removed.append(directory)
    return removed


def _check_target(target):
    root = os.path.abspath(target)
    if not os.path.exists(root):
        raise SetupError(f"Target directory does not exist: {root}")
    if not os.path.isdir(root):
        raise SetupError(f"Target is not a directory: {root}")
    return root


def flatten(options):
    """
    Flattens options.target according to the run options and returns a
    FlattenResult. Any hard error stops the run immediately; whatever was moved
    or removed before that point stays as it is.
    """
    logger = setup_logger()
    try:
        root = _check_target(options.target)
    except SetupError as e:
        logger.critical(str(e))
        raise

    mode = "move" if options.delete else "copy"
    logger.info(f"Flattening {root} ({mode} mode{', dry run' if options.dry_run else ''})")

    result = FlattenResult()
    directories = []
    planned = set()
    blocked = set()  # directories holding a skipped file, dry run only

    def exists(path):
        if options.dry_run and path in planned:
            return True
        return os.path.lexists(path)

    for entry in iter_entries(root):
        if entry.is_dir:
            directories.append(entry.path)
            continue
        if not needs_relocation(entry, root):
            continue

        name = os.path.basename(entry.path)
        destination, renamed = resolve_destination(root, name, options.rename, exists)

        if destination is None:
            existing = os.path.join(root, name)
            logger.warning(f"Skipping {entry.path}: {existing} already exists")
            result.skipped.append((entry.path, existing))
            blocked.add(os.path.dirname(entry.path))
            continue

        if renamed:
            logger.info(f"Renamed {entry.path} -> {destination} to avoid overwriting {os.path.join(root, name)}")
            result.renamed += 1

        if options.dry_run:
            logger.info(f"Would {mode} {entry.path} -> {destination}")
            planned.add(destination)
        else:
            relocate(entry.path, destination, options.delete)
        result.relocated.append((entry.path, destination))

    if options.delete:
        if options.dry_run:
            for directory in sorted(directories, key=lambda d: d.count(os.sep), reverse=True):
                if any(b == directory or b.startswith(directory + os.sep) for b in blocked):
                    continue
                logger.info(f"Would remove directory {directory}")
                result.removed_dirs.append(directory)
        else:
            result.removed_dirs = remove_empty_dirs(directories, root)

    return result
