import posixpath as _pp


SEP = '/'
HOME = '~'
PARENT = '..'
CURRENT = '.'


def join_paths(sep: str, *paths: str) -> str:
    '''
    Joins the provided paths into a single path \
    by using the provided separator and returns the result.

    :param str sep: The path separator that is to be used.
    :param *str paths: The paths that are to be joined.
    '''
    paths = [p for p in paths if p != '']

    if len(paths) == 0:
        return ''

    path = paths[0]

    for i in range(1, len(paths)):
        path = f"{path.rstrip(sep)}{sep}{paths[i].lstrip(sep)}"

    return path


def relativize_path(parent: str, child: str, sep: str) -> str:
    '''
    Modifies the child path so that it is \
    relative to the parent path.

    :param str parent: The parent path.
    :param str child: The child path.
    :param str sep: The path separator used.
    '''
    return child.removeprefix(parent).lstrip(sep)


def split_pathname(pathname: str) -> tuple[str, str]:
    '''
    Splits the provided path into its directory \
    component and its leaf component.

    A bare leaf has ``.`` as its directory, and \
    the root directory has an empty leaf.

    :param str pathname: The path that is to be split.
    '''
    stripped = pathname.rstrip(SEP)

    if stripped == '':
        return (SEP, '') if pathname != '' else (CURRENT, '')

    dirname, sep, basename = stripped.rpartition(SEP)

    if sep == '':
        return CURRENT, basename

    return (dirname.rstrip(SEP) or SEP), basename


def strip_prefix(path: str, prefix: str) -> str:
    '''
    Removes ``prefix`` from the beginning of ``path`` \
    only if it matches a whole number of path segments.

    :param str path: The path in question.
    :param str prefix: The prefix that is to be removed.
    '''
    if prefix == '':
        return path
    if path == prefix or path.startswith(prefix + SEP):
        return path[len(prefix):]
    return path


def has_parent_segment(path: str) -> bool:
    '''
    Returns ``True`` if any segment of the \
    provided path is ``..``.

    :param str path: The path in question.
    '''
    return PARENT in path.split(SEP)


def escapes_root(relative_path: str) -> bool:
    '''
    Returns ``True`` if the provided relative path \
    climbs above the directory it is relative to \
    once normalized.

    :param str relative_path: A path relative to \
        some root directory.
    '''
    relative_path = relative_path.lstrip(SEP)
    if relative_path == '':
        return False
    normalized = _pp.normpath(relative_path)
    return normalized == PARENT or normalized.startswith(PARENT + SEP)


def is_root(relative_path: str) -> bool:
    '''
    Returns ``True`` if the provided relative path \
    points to the directory it is relative to \
    once normalized.

    :param str relative_path: A path relative to \
        some root directory.
    '''
    return _pp.normpath(relative_path.lstrip(SEP) or CURRENT) == CURRENT
