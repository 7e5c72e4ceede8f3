

__all__ = [
    'Directory',
    'File'
]


import typing as _typ
from abc import ABC as _ABC
from abc import abstractmethod as _absmethod


from .connection import Connection as _Connection
from ._handlers import EntryType as _EntryType
from ._handlers import ListingEntry as _ListingEntry
from ._paths import ItemPath as _ItemPath
from ._paths import Location as _Location
from ._helper import SEP as _SEP
from ._helper import HOME as _HOME
from ._helper import PARENT as _PARENT
from ._helper import CURRENT as _CURRENT
from ._helper import join_paths as _join_paths
from ._helper import relativize_path as _relativize
from ._helper import split_pathname as _split_pathname
from ._helper import is_root as _is_root
from ._exceptions import InvalidPathError as _IPE
from ._exceptions import UnreachableItemError as _UIE


class _Item(_ABC):
    '''
    An abstract class which serves as the base class \
    for all remote item classes, i.e. files and directories.

    :param Connection conn: The connection through which \
        the item is reached.
    :param str pathname: A path pointing to the item. It can \
        be relative to the chroot directory, start with ``~/``, \
        or start with the chroot directory itself.
    :param str | None chroot_dir: The absolute path of the \
        directory to which the item is confined. If ``None``, \
        then the user's home directory is used. Defaults to ``None``.
    :param bool new: Indicates that the item does not exist \
        remotely yet. In that case, ``pathname`` is the directory \
        in which the item is to be created, and its name is to \
        be provided through ``set_name``. Defaults to ``False``.

    :raises InvalidPathError: The provided path resolves \
        outside of the chroot directory.
    '''

    def __init__(
        self,
        conn: _Connection,
        pathname: str,
        chroot_dir: _typ.Optional[str] = None,
        new: bool = False
    ):
        '''
        An abstract class which serves as the base class \
        for all remote item classes, i.e. files and directories.

        :param Connection conn: The connection through which \
            the item is reached.
        :param str pathname: A path pointing to the item. It can \
            be relative to the chroot directory, start with ``~/``, \
            or start with the chroot directory itself.
        :param str | None chroot_dir: The absolute path of the \
            directory to which the item is confined. If ``None``, \
            then the user's home directory is used. Defaults to ``None``.
        :param bool new: Indicates that the item does not exist \
            remotely yet. In that case, ``pathname`` is the directory \
            in which the item is to be created, and its name is to \
            be provided through ``set_name``. Defaults to ``False``.

        :raises InvalidPathError: The provided path resolves \
            outside of the chroot directory.
        '''
        self.__conn = conn

        if not chroot_dir:
            chroot_dir = conn.get_home()

        self.__item_path = _ItemPath(chroot_dir=chroot_dir)
        self.__new = new
        self.__retrieved = False
        self.__mtime = None
        self.__content = None

        dirname, basename = _split_pathname(pathname)

        if dirname == _CURRENT and basename == _HOME:
            dirname, basename = f"{_HOME}{_SEP}", ''
        elif dirname == _HOME:
            dirname = f"{_HOME}{_SEP}"
        elif dirname == _CURRENT:
            dirname = ''

        if new:
            dirname = f"{dirname}{_SEP}{basename}"
            basename = ''

        self.set_name(basename, validate=False)
        self.set_path(dirname, validate=not new)

        if not new:
            self.__item_path.snapshot()


    def get_connection(self) -> _Connection:
        '''
        Returns the connection through which \
        the item is reached.
        '''
        return self.__conn


    def get_name(self) -> str:
        '''
        Returns the item's name.
        '''
        return self.__item_path.get_name()


    def set_name(self, name: str, validate: bool = True) -> '_Item':
        '''
        Sets the item's name and returns the item.

        :param str name: The item's new name.
        :param bool validate: Indicates whether the resulting \
            path is to be validated. Defaults to ``True``.

        :raises InvalidPathError: The resulting path \
            resolves outside of the chroot directory.
        '''
        self.__item_path.set_name(name, validate=validate)

        # A new item gets its identity once named.
        if (
            self.__new and name != '' and
            self.__item_path.get_old_location() is None
        ):
            self.__item_path.snapshot()

        return self


    def get_path(self) -> str:
        '''
        Returns the path of the directory in which the \
        item resides, relative to the chroot directory.
        '''
        return self.__item_path.get_path()


    def set_path(self, path: str, validate: bool = True) -> '_Item':
        '''
        Sets the path of the directory in which the \
        item resides and returns the item.

        :param str path: The new directory path. A leading \
            chroot directory or ``~/`` is removed.
        :param bool validate: Indicates whether the resulting \
            path is to be validated. Defaults to ``True``.

        :raises InvalidPathError: The resulting path \
            resolves outside of the chroot directory.
        '''
        self.__item_path.set_path(path, validate=validate)
        return self


    def get_chroot_dir(self) -> str:
        '''
        Returns the directory to which the item is confined.
        '''
        return self.__item_path.get_chroot_dir()


    def get_old_location(self) -> _typ.Optional[_Location]:
        '''
        Returns the location from which the item is \
        to be renamed, or ``None`` for a new item that \
        has not been named yet.
        '''
        return self.__item_path.get_old_location()


    def get_old_path(self) -> str:
        '''
        Returns the directory path from which the \
        item is to be renamed.
        '''
        old = self.get_old_location()
        return old.path if old is not None else self.get_path()


    def get_old_name(self) -> str:
        '''
        Returns the name from which the item \
        is to be renamed.
        '''
        old = self.get_old_location()
        return old.name if old is not None else self.get_name()


    def validate_path(self) -> bool:
        '''
        Returns ``True`` if the item's full path lies \
        within its chroot directory, else returns ``False``.
        '''
        return self.__item_path.validate()


    def get_full_path(
        self,
        path: _typ.Optional[str] = None,
        name: _typ.Optional[str] = None
    ) -> str:
        '''
        Returns the item's absolute path.

        :param str | None path: If not ``None``, then it replaces \
            the item's directory path. Defaults to ``None``.
        :param str | None name: If not ``None``, then it replaces \
            the item's name. Defaults to ``None``.
        '''
        return self.__item_path.get_full_path(path, name)


    def get_relative_path(
        self,
        path: _typ.Optional[str] = None,
        name: _typ.Optional[str] = None
    ) -> str:
        '''
        Returns the item's path relative to \
        the chroot directory.

        :param str | None path: If not ``None``, then it replaces \
            the item's directory path. Defaults to ``None``.
        :param str | None name: If not ``None``, then it replaces \
            the item's name. Defaults to ``None``.
        '''
        return self.__item_path.get_relative_path(path, name)


    def get_uri(self) -> str:
        '''
        Returns the item's URI.
        '''
        host = self.__conn.get_server().get_hostname()
        return f"sftp://{host}/{self.get_full_path().removeprefix(_SEP)}"


    def get_mtime(self) -> _typ.Optional[int]:
        '''
        Returns the item's last known modification time.
        '''
        return self.__mtime


    def set_mtime(self, mtime: _typ.Optional[int]) -> None:
        '''
        Sets the item's last known modification time.

        :param int | None mtime: A UNIX timestamp.
        '''
        self.__mtime = mtime


    def is_new(self) -> bool:
        '''
        Returns ``True`` if the item does not \
        exist remotely yet, else returns ``False``.
        '''
        return self.__new


    def set_new(self, new: bool = True) -> None:
        '''
        Sets whether the item exists remotely or not.

        :param bool new: ``True`` if the item does not \
            exist remotely yet. Defaults to ``True``.
        '''
        self.__new = new


    def is_retrieved(self) -> bool:
        '''
        Returns ``True`` if the item's content \
        has been fetched at least once.
        '''
        return self.__retrieved


    def get_content(self) -> _typ.Any:
        '''
        Returns the item's content. An existing item \
        fetches its content the first time it is requested.
        '''
        if not self.__retrieved and not self.__new:
            self.retrieve()

        return self.__content


    def delete(self) -> bool:
        '''
        Deletes the item from the server.

        :raises InvalidPathError: The item's path \
            resolves outside of the chroot directory.
        :raises UnreachableItemError: The server \
            failed to delete the item.
        '''
        self._check_path()

        path = self.get_full_path()
        removed = self._get_transport().delete(path)

        self._report('delete', f'Removing "{path}"', removed)

        if not removed:
            raise _UIE(self)

        return removed


    def rename(self) -> bool:
        '''
        Moves the item from the location it was last \
        known by to its current location.

        :raises InvalidPathError: The item's path \
            resolves outside of the chroot directory.
        :raises UnreachableItemError: The server \
            failed to rename the item.
        '''
        self._check_path()

        old_path = self.get_full_path(self.get_old_path(), self.get_old_name())
        new_path = self.get_full_path()
        renamed = self._get_transport().rename(old_path, new_path)

        self._report(
            'rename',
            f'Renaming "{old_path}" to "{new_path}"',
            renamed)

        if not renamed:
            raise _UIE(self)

        self.__item_path.snapshot()

        return renamed


    @_absmethod
    def retrieve(self) -> _typ.Any:
        '''
        Fetches the item's content from the server.
        '''
        pass


    @_absmethod
    def create(self) -> bool:
        '''
        Creates the item on the server.
        '''
        pass


    @_absmethod
    def update(self) -> bool:
        '''
        Pushes the item's local changes to the server.
        '''
        pass


    def _set_content(self, content: _typ.Any) -> None:
        '''
        Caches the provided content and marks \
        it as retrieved.

        :param Any content: The item's content.
        '''
        self.__content = content
        self.__retrieved = True


    def _peek_content(self) -> _typ.Any:
        '''
        Returns the cached content without \
        fetching it.
        '''
        return self.__content


    def _mark_created(self) -> None:
        '''
        Marks the item as existing remotely \
        at its current location.
        '''
        self.__new = False
        self.__item_path.snapshot()


    def _get_transport(self):
        '''
        Returns the connection's transport handler.
        '''
        return self.__conn.get_transport()


    def _check_path(self) -> None:
        '''
        Raises an ``InvalidPathError`` unless the item's \
        full path lies within its chroot directory.
        '''
        if not self.validate_path():
            raise _IPE(self.get_relative_path())


    def _report(self, operation: str, message: str, result: _typ.Any) -> None:
        '''
        Logs the outcome of a remote operation: a debug \
        record carrying the transport transcript and an \
        info record summarizing it.

        :param str operation: The operation's name.
        :param str message: A description of the operation.
        :param Any result: The transport's result, \
            where falsy means failure.
        '''
        logger = self.__conn.get_logger()
        name = self.__class__.__name__
        transcript = self._get_transport().get_log()

        logger.debug(
            "%s.%s: %s", name, operation, ' | '.join(transcript),
            extra={'transport_log': transcript})
        logger.info(
            '%s.%s - %s on sftp server "%s" %s',
            name, operation, message,
            self.__conn.get_server(),
            'succeed' if result else 'failed')


    def __repr__(self) -> str:
        return f"{self.__class__.__name__}('{self.get_full_path()}')"


class File(_Item):
    '''
    This class represents a file which resides \
    within a remote machine's file system.

    :param Connection conn: The connection through which \
        the file is reached.
    :param str pathname: A path pointing to the file.
    :param str | None chroot_dir: The absolute path of the \
        directory to which the file is confined. If ``None``, \
        then the user's home directory is used. Defaults to ``None``.
    :param bool new: Indicates that the file does not exist \
        remotely yet. Defaults to ``False``.

    :raises InvalidPathError: The provided path resolves \
        outside of the chroot directory.
    '''

    def __init__(
        self,
        conn: _Connection,
        pathname: str,
        chroot_dir: _typ.Optional[str] = None,
        new: bool = False
    ):
        super().__init__(
            conn=conn,
            pathname=pathname,
            chroot_dir=chroot_dir,
            new=new)
        self.__size = None


    def get_size(self) -> _typ.Optional[int]:
        '''
        Returns the file's size in bytes, as last \
        reported by the server.
        '''
        return self.__size


    def set_size(self, size: _typ.Optional[int]) -> None:
        '''
        Sets the file's size in bytes.

        :param int | None size: The file's size.
        '''
        self.__size = size


    def set_content(self, content: _typ.Union[bytes, str]) -> 'File':
        '''
        Replaces the file's content locally, and \
        returns the file. Call ``create`` or ``update`` \
        in order to push it to the server.

        :param bytes | str content: The new content. \
            Text is encoded as UTF-8.
        '''
        if isinstance(content, str):
            content = content.encode('utf-8')
        self._set_content(content)
        return self


    def read_text(self, encoding: str = 'utf-8') -> str:
        '''
        Returns the file's contents as text.

        :param str encoding: The encoding with which to decode \
            the bytes. Defaults to ``utf-8``.
        '''
        return (self.get_content() or b'').decode(encoding)


    def read_lines(self, encoding: str = 'utf-8') -> _typ.Iterator[str]:
        '''
        Returns an iterator capable of going through \
        the file line-by-line.

        :param str encoding: The encoding with which to decode \
            the bytes. Defaults to ``utf-8``.
        '''
        yield from self.read_text(encoding).split('\n')


    def retrieve(self) -> bytes:
        '''
        Fetches the file's contents from the server, \
        caches them and returns them. The file's size \
        and modification time are refreshed as well.

        :raises InvalidPathError: The file's path \
            resolves outside of the chroot directory.
        :raises UnreachableItemError: The server \
            failed to read the file.
        '''
        self._check_path()

        path = self.get_full_path()
        data = self._get_transport().read(path)

        self._report('retrieve', f'Retrieving file "{path}"', data is not None)

        if data is None:
            raise _UIE(self)

        self._set_content(data)
        self.__refresh_metadata(path)

        return data


    def create(self) -> bool:
        '''
        Writes the file's content into a new file \
        on the server. An empty file is created if \
        no content has been set.

        :raises InvalidPathError: The file's path \
            resolves outside of the chroot directory.
        :raises UnreachableItemError: The server \
            failed to write the file.
        '''
        self._check_path()

        data = self._peek_content() or b''
        written = self.__write(operation='create', data=data)

        self._mark_created()

        return written


    def update(self) -> bool:
        '''
        Moves the file if it has been renamed and then \
        writes its content, if any has been loaded or set.

        :raises InvalidPathError: The file's path \
            resolves outside of the chroot directory.
        :raises UnreachableItemError: The server \
            failed to move or write the file.
        '''
        self._check_path()

        result = True

        old = self.get_old_location()
        if old is not None and old != (self.get_path(), self.get_name()):
            result = self.rename()

        if self.is_retrieved():
            result = self.__write(
                operation='update',
                data=self._peek_content())

        return result


    def __write(self, operation: str, data: bytes) -> bool:
        '''
        Writes ``data`` into the file on the server.

        :param str operation: The operation on whose \
            behalf the file is written.
        :param bytes data: The bytes that are to be written.

        :raises UnreachableItemError: The server \
            failed to write the file.
        '''
        path = self.get_full_path()
        written = self._get_transport().write(path, data)

        self._report(
            operation,
            f'Writing {len(data)} bytes into file "{path}"',
            written)

        if not written:
            raise _UIE(self)

        self.__refresh_metadata(path)

        return written


    def __refresh_metadata(self, path: str) -> None:
        '''
        Refreshes the file's size and modification time \
        as reported by the server. Both are left as they \
        were if the server cannot stat the file.

        :param str path: The file's absolute path.
        '''
        entry = self._get_transport().stat(path)

        if entry is None:
            self.get_connection().get_logger().debug(
                '%s.stat: %s', self.__class__.__name__,
                ' | '.join(self._get_transport().get_log()))
            return

        self.__size = entry.size
        self.set_mtime(entry.mtime)


class Directory(_Item):
    '''
    This class represents a directory which resides \
    within a remote machine's file system.

    Once retrieved, a directory behaves as a sequence \
    of its children: subdirectories first, then files, \
    each group sorted by name.

    :param Connection conn: The connection through which \
        the directory is reached.
    :param str pathname: A path pointing to the directory.
    :param str | None chroot_dir: The absolute path of the \
        directory to which this one is confined. If ``None``, \
        then the user's home directory is used. Defaults to ``None``.
    :param bool new: Indicates that the directory does not \
        exist remotely yet. Defaults to ``False``.

    :raises InvalidPathError: The provided path resolves \
        outside of the chroot directory.
    '''

    def __init__(
        self,
        conn: _Connection,
        pathname: str,
        chroot_dir: _typ.Optional[str] = None,
        new: bool = False
    ):
        super().__init__(
            conn=conn,
            pathname=pathname,
            chroot_dir=chroot_dir,
            new=new)


    def set_content(self, content: _typ.Optional[list[_Item]] = None) -> 'Directory':
        '''
        Replaces the directory's cached children, \
        and returns the directory.

        :param list[_Item] | None content: The new children. \
            Defaults to ``None``, i.e. no children.
        '''
        self._set_content(list(content) if content is not None else [])
        return self


    def count(self) -> int:
        '''
        Returns the number of cached children.
        '''
        return len(self)


    def get_file(self, path: str) -> File:
        '''
        Returns the file residing in the specified \
        path as a ``File`` instance. No remote call \
        is made.

        :param str path: The path of the file, relative \
            to this directory.

        :raises InvalidPathError: The provided path \
            resolves outside of the chroot directory.
        '''
        return File(
            conn=self.get_connection(),
            pathname=self.__child_pathname(path),
            chroot_dir=self.__child_chroot_dir())


    def get_subdir(self, path: str) -> 'Directory':
        '''
        Returns the subdirectory residing in the specified \
        path as a ``Directory`` instance. No remote call \
        is made.

        :param str path: The path of the subdirectory, \
            relative to this directory.

        :raises InvalidPathError: The provided path \
            resolves outside of the chroot directory.
        '''
        return Directory(
            conn=self.get_connection(),
            pathname=self.__child_pathname(path),
            chroot_dir=self.__child_chroot_dir())


    def traverse(self, recursively: bool = False) -> _typ.Iterator[_Item]:
        '''
        Returns an iterator capable of going through \
        the directory's children, fetching them if need be.

        :param bool recursively: Indicates whether subdirectories \
            are to be traversed as well, each one right after \
            it has been yielded. Defaults to ``False``.
        '''
        for item in self.get_content() or []:
            if item.get_name() == _PARENT:
                continue
            yield item
            if recursively and isinstance(item, Directory):
                yield from item.traverse(recursively=True)


    def ls(self, recursively: bool = False) -> None:
        '''
        Prints the paths of the directory's children, \
        relative to the directory.

        :param bool recursively: Indicates whether subdirectories \
            are to be listed as well. Defaults to ``False``.
        '''
        parent = self.get_relative_path()
        for item in self.traverse(recursively=recursively):
            path = _relativize(
                parent=parent,
                child=item.get_relative_path(),
                sep=_SEP)
            print(f"{path}{_SEP}" if isinstance(item, Directory) else path)


    def retrieve(self) -> dict[str, _ListingEntry]:
        '''
        Fetches the directory's listing from the server, \
        caches its children and returns the raw listing.

        :raises InvalidPathError: The directory's path or \
            any of its children's resolves outside of the \
            chroot directory.
        :raises UnreachableItemError: The server failed \
            to list the directory.
        '''
        self._check_path()

        path = self.get_relative_path()
        full_path = self.get_full_path()

        listing = self._get_transport().list_dir(full_path)

        self._report(
            'retrieve',
            f'Retrieving directory "{full_path}"',
            listing is not None)

        if listing is None:
            raise _UIE(self)

        conn = self.get_connection()
        chroot_dir = self.__child_chroot_dir()
        dirs, files = {}, {}

        at_root = _is_root(path)

        for name, entry in listing.items():
            if name == _PARENT and at_root:
                continue
            elif name == _CURRENT:
                continue

            if entry.type == _EntryType.FILE:
                item = File(conn, f"{path}{_SEP}{name}", chroot_dir)
                item.set_size(entry.size)
                files[name] = item
            else:
                item = Directory(conn, f"{path}{_SEP}{name}", chroot_dir)
                dirs[name] = item

            item.set_mtime(entry.mtime)

        self._set_content(
            [dirs[name] for name in sorted(dirs)] +
            [files[name] for name in sorted(files)])

        return listing


    def create(self) -> bool:
        '''
        Creates the directory on the server.

        :raises InvalidPathError: The directory's path \
            resolves outside of the chroot directory.
        :raises UnreachableItemError: The server failed \
            to create the directory.
        '''
        self._check_path()

        path = self.get_full_path()
        created = self._get_transport().mkdir(path)

        self._report('create', f'Creating directory "{path}"', created)

        if not created:
            raise _UIE(self)

        self._mark_created()

        return created


    def update(self) -> bool:
        '''
        Moves the directory to its current location.

        :raises InvalidPathError: The directory's path \
            resolves outside of the chroot directory.
        :raises UnreachableItemError: The server failed \
            to move the directory.
        '''
        self.get_connection().get_logger().info(
            '%s.update - Updating directory "%s" on sftp server "%s".',
            self.__class__.__name__,
            self.get_full_path(),
            self.get_connection().get_server())

        return self.rename()


    def __child_pathname(self, path: str) -> str:
        '''
        Returns the pathname of a child, relative \
        to the chroot directory.

        :param str path: The child's path relative \
            to this directory.
        '''
        return _join_paths(_SEP, self.get_relative_path(), path)


    def __child_chroot_dir(self) -> str:
        '''
        Returns the chroot directory children are \
        to be confined to.
        '''
        return self.get_chroot_dir() or _SEP


    def __iter__(self) -> _typ.Iterator[_Item]:
        return iter(self._peek_content() or [])


    def __len__(self) -> int:
        return len(self._peek_content() or [])


    def __getitem__(self, index: int) -> _Item:
        return (self._peek_content() or [])[index]
