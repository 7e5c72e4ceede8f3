from typing import NamedTuple as _NamedTuple
from typing import Optional as _Optional


from ._exceptions import InvalidPathError as _IPE
from ._helper import SEP as _SEP
from ._helper import HOME as _HOME
from ._helper import join_paths as _join_paths
from ._helper import strip_prefix as _strip_prefix
from ._helper import has_parent_segment as _has_parent
from ._helper import escapes_root as _escapes_root


class Location(_NamedTuple):
    '''
    The location of an item, relative to its \
    chroot directory.
    '''
    path: str
    name: str


class ItemPath():
    '''
    This class resolves an item's location against \
    a chroot directory and makes sure that it never \
    resolves outside of it.

    :param str chroot_dir: The absolute path of the \
        directory to which the item is confined.
    '''

    def __init__(self, chroot_dir: str):
        '''
        This class resolves an item's location against \
        a chroot directory and makes sure that it never \
        resolves outside of it.

        :param str chroot_dir: The absolute path of the \
            directory to which the item is confined.
        '''
        self.__chroot_dir = chroot_dir.rstrip(_SEP)
        self.__path = ''
        self.__name = ''
        self.__old: _Optional[Location] = None


    def get_chroot_dir(self) -> str:
        '''
        Returns the chroot directory, without \
        any trailing separator.
        '''
        return self.__chroot_dir


    def get_path(self) -> str:
        '''
        Returns the directory component, relative \
        to the chroot directory.
        '''
        return self.__path


    def get_name(self) -> str:
        '''
        Returns the leaf component.
        '''
        return self.__name


    def get_location(self) -> Location:
        '''
        Returns the current location.
        '''
        return Location(self.__path, self.__name)


    def get_old_location(self) -> _Optional[Location]:
        '''
        Returns the last captured location, or ``None`` \
        if no location has been captured yet.
        '''
        return self.__old


    def snapshot(self) -> Location:
        '''
        Captures the current location as the one \
        the item will be renamed from, and returns it.
        '''
        self.__old = self.get_location()
        return self.__old


    def set_name(self, name: str, validate: bool = True) -> None:
        '''
        Sets the leaf component.

        :param str name: The new leaf component.
        :param bool validate: Indicates whether the resulting \
            location is to be validated. Defaults to ``True``.

        :raises InvalidPathError: The resulting location \
            resolves outside of the chroot directory.
        '''
        self.__name = name

        if validate and not self.validate():
            raise _IPE(name)


    def set_path(self, path: str, validate: bool = True) -> None:
        '''
        Sets the directory component. A leading chroot \
        directory or ``~/`` is removed once, and so are \
        any surrounding separators.

        :param str path: The new directory component.
        :param bool validate: Indicates whether the resulting \
            location is to be validated. Defaults to ``True``.

        :raises InvalidPathError: The resulting location \
            resolves outside of the chroot directory.
        '''
        stripped = _strip_prefix(path, self.__chroot_dir)

        if stripped == path and path.startswith(f"{_HOME}{_SEP}"):
            stripped = path[2:]

        self.__path = stripped.strip(_SEP)

        if validate and not self.validate():
            raise _IPE(self.__path)


    def validate(self) -> bool:
        '''
        Returns ``True`` if the full path lies within \
        the chroot directory, else returns ``False``.

        A ``..`` segment is accepted only as long as \
        it does not climb above the chroot directory.
        '''
        if not self.get_full_path().startswith(f"{self.__chroot_dir}{_SEP}"):
            return False

        relative_path = self.get_relative_path()

        return not (
            _has_parent(relative_path) and
            _escapes_root(relative_path))


    def get_full_path(
        self,
        path: _Optional[str] = None,
        name: _Optional[str] = None
    ) -> str:
        '''
        Returns the absolute path of the item, that is \
        the chroot directory followed by its relative path.

        :param str | None path: If not ``None``, then it \
            replaces the directory component. Defaults to ``None``.
        :param str | None name: If not ``None``, then it \
            replaces the leaf component. Defaults to ``None``.
        '''
        return f"{self.__chroot_dir}{_SEP}{self.get_relative_path(path, name)}"


    def get_relative_path(
        self,
        path: _Optional[str] = None,
        name: _Optional[str] = None
    ) -> str:
        '''
        Returns the path of the item relative \
        to the chroot directory. There is no trailing \
        separator whenever the resolved name is empty, \
        even if it was explicitly provided.

        :param str | None path: If not ``None``, then it \
            replaces the directory component. Defaults to ``None``.
        :param str | None name: If not ``None``, then it \
            replaces the leaf component. Defaults to ``None``.
        '''
        path = self.__path if path is None else path
        name = self.__name if name is None else name

        return _join_paths(_SEP, path, name).rstrip(_SEP) \
            if name == '' else _join_paths(_SEP, path, name)
