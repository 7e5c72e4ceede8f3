import logging as _logging
from abc import ABC as _ABC
from abc import abstractmethod as _absmethod
from enum import Enum as _Enum
from stat import S_ISDIR as _is_dir
from stat import S_ISLNK as _is_link
from stat import S_ISREG as _is_reg
from typing import NamedTuple as _NamedTuple
from typing import Optional as _Optional


import paramiko as _prmk


from .server import Server as _Server
from ._exceptions import UnknownKeyTypeError as _UKTE
from ._helper import SEP as _SEP
from ._helper import join_paths as _join_paths


_logger = _logging.getLogger(__name__)


class EntryType(_Enum):
    '''
    This enum-class represents the type \
    of an entry within a directory listing.
    '''
    FILE = 1
    DIRECTORY = 2
    SYMLINK = 3
    OTHER = 4


    @classmethod
    def from_mode(cls, st_mode: _Optional[int]) -> 'EntryType':
        '''
        Returns the entry type that corresponds \
        to the provided ``st_mode`` bits.

        :param int | None st_mode: The mode reported \
            by the server, if any.
        '''
        if st_mode is None:
            return cls.OTHER
        if _is_reg(st_mode):
            return cls.FILE
        if _is_dir(st_mode):
            return cls.DIRECTORY
        if _is_link(st_mode):
            return cls.SYMLINK
        return cls.OTHER


class ListingEntry(_NamedTuple):
    '''
    A single record of a remote directory listing.
    '''
    name: str
    type: EntryType
    size: _Optional[int]
    mtime: _Optional[int]


    @classmethod
    def from_attributes(cls, attr: _prmk.SFTPAttributes, name: _Optional[str] = None) -> 'ListingEntry':
        '''
        Builds a ``ListingEntry`` out of an ``SFTPAttributes`` instance.

        :param SFTPAttributes attr: The attributes reported \
            by the server.
        :param str | None name: Overrides the entry's name. \
            Defaults to the attributes' file name.
        '''
        return cls(
            name=attr.filename if name is None else name,
            type=EntryType.from_mode(attr.st_mode),
            size=attr.st_size,
            mtime=attr.st_mtime)


class TransportHandler(_ABC):
    '''
    An abstract class which serves as the \
    base class for all transport-handler-like classes.

    Every operation reports failure through a falsy \
    result and keeps a transcript of the calls it made, \
    which can be fetched through ``get_log``.
    '''

    def __init__(self):
        '''
        An abstract class which serves as the \
        base class for all transport-handler-like classes.
        '''
        self.__log: list[str] = []


    def get_log(self) -> list[str]:
        '''
        Returns the transcript of the last operation.
        '''
        return list(self.__log)


    def _begin(self, operation: str, *args: str) -> None:
        '''
        Starts a new transcript for the provided operation.

        :param str operation: The operation's name.
        :param *str args: The operation's arguments.
        '''
        self.__log = [' '.join((f"-> {operation}", *args))]


    def _record(self, message: str) -> None:
        '''
        Appends a line to the current transcript.

        :param str message: The line that is to be appended.
        '''
        self.__log.append(f"<- {message}")


    @_absmethod
    def is_open(self) -> bool:
        '''
        Returns a value indicating whether \
        this handler's underlying session \
        is open or not.
        '''
        pass


    @_absmethod
    def open_connections(self) -> None:
        '''
        Opens all necessary connections.
        '''
        pass


    @_absmethod
    def close_connections(self) -> None:
        '''
        Close all open connections.
        '''
        pass


    @_absmethod
    def get_home(self) -> str:
        '''
        Returns the absolute path of the remote \
        working directory of a freshly opened session.
        '''
        pass


    @_absmethod
    def list_dir(self, path: str) -> _Optional[dict[str, ListingEntry]]:
        '''
        Returns the entries of the provided directory \
        keyed by their name, or ``None`` on failure.

        :param str path: The absolute path of the directory.
        '''
        pass


    @_absmethod
    def stat(self, path: str) -> _Optional[ListingEntry]:
        '''
        Returns a listing entry describing the provided \
        path, or ``None`` on failure.

        :param str path: An absolute path.
        '''
        pass


    @_absmethod
    def mkdir(self, path: str) -> bool:
        '''
        Creates a directory into the provided path.

        :param str path: The absolute path of the directory \
            that is to be created.
        '''
        pass


    @_absmethod
    def delete(self, path: str) -> bool:
        '''
        Deletes the provided path. Directories are \
        deleted along with their contents.

        :param str path: An absolute path.
        '''
        pass


    @_absmethod
    def rename(self, old_path: str, new_path: str) -> bool:
        '''
        Moves ``old_path`` to ``new_path``.

        :param str old_path: The absolute path of the item.
        :param str new_path: The item's new absolute path.
        '''
        pass


    @_absmethod
    def read(self, path: str) -> _Optional[bytes]:
        '''
        Returns the contents of the provided file, \
        or ``None`` on failure.

        :param str path: The absolute path of the file.
        '''
        pass


    @_absmethod
    def write(self, path: str, data: bytes) -> bool:
        '''
        Writes ``data`` into the provided file, \
        replacing any previous contents.

        :param str path: The absolute path of the file.
        :param bytes data: The bytes that are to be written.
        '''
        pass


class SFTPHandler(TransportHandler):
    '''
    A class used in handling the SSH and SFTP \
    connections to a remote server.

    :param Server server: A ``Server`` instance describing \
        the remote machine and its credentials.
    '''

    def __init__(self, server: _Server):
        '''
        A class used in handling the SSH and SFTP \
        connections to a remote server.

        :param Server server: A ``Server`` instance describing \
            the remote machine and its credentials.
        '''
        super().__init__()
        self.__server = server
        self.__ssh: _prmk.SSHClient = None
        self.__sftp: _prmk.SFTPClient = None


    def is_open(self) -> bool:
        '''
        Returns a value indicating whether \
        this handler's underlying session \
        is open or not.
        '''
        return self.__ssh is not None


    def open_connections(self) -> None:
        '''
        Opens an SSH/SFTP connection to \
        the remote server.

        :raises UnknownKeyTypeError: The host's public \
            key is of an unsupported type.
        '''
        if self.__ssh is not None:
            return

        ssh = _prmk.SSHClient()

        credentials = self.__server.get_credentials()

        public_key = credentials.pop('public_key')
        key_type = credentials.pop('key_type')
        verify_host = credentials.pop('verify_host')

        _logger.info("Establishing connection to '%s'...", self.__server)

        ssh.load_system_host_keys()

        # Accept unknown hosts unless asked to verify them.
        if not verify_host:
            ssh.set_missing_host_key_policy(_prmk.AutoAddPolicy)
        elif public_key is not None and key_type is not None:
            if key_type == 'ssh-rsa':
                key_builder = _prmk.RSAKey
            elif key_type == 'ssh-ed25519':
                key_builder = _prmk.Ed25519Key
            elif 'ecdsa-sha2' in key_type:
                key_builder = _prmk.ECDSAKey
            else:
                raise _UKTE(key_type=key_type)

            from base64 import decodebytes as _decodebytes

            ssh.get_host_keys().add(
                hostname=credentials['hostname'],
                keytype=str(key_type),
                key=key_builder(data=_decodebytes(
                    public_key.encode())))

        if 'pkey' in credentials:
            credentials.update({'pkey': _prmk.PKey.from_path(
                path=credentials['pkey'],
                passphrase=credentials.pop('passphrase'))})

        ssh.connect(**credentials)

        self.__ssh = ssh
        self.__sftp = ssh.open_sftp()
        _logger.info("Connection to '%s' established.", self.__server)


    def close_connections(self) -> None:
        '''
        Closes the SSH/SFTP connection to \
        the remote server.
        '''
        if self.__ssh is not None:
            self.__sftp.close()
            self.__sftp = None
            self.__ssh.close()
            self.__ssh = None


    def get_home(self) -> str:
        '''
        Returns the absolute path of the remote \
        working directory of a freshly opened session.
        '''
        return self.__get_sftp().normalize(path='.')


    def list_dir(self, path: str) -> _Optional[dict[str, ListingEntry]]:
        '''
        Returns the entries of the provided directory \
        keyed by their name, or ``None`` on failure.

        :param str path: The absolute path of the directory.
        '''
        self._begin('list_dir', path)
        try:
            attrs = self.__get_sftp().listdir_attr(path=path)
        except (IOError, _prmk.SSHException) as e:
            self._record(f"FAILED: {e}")
            return None
        self._record(f"OK ({len(attrs)} entries)")
        return {
            attr.filename: ListingEntry.from_attributes(attr)
            for attr in attrs
        }


    def stat(self, path: str) -> _Optional[ListingEntry]:
        '''
        Returns a listing entry describing the provided \
        path, or ``None`` on failure.

        :param str path: An absolute path.
        '''
        self._begin('stat', path)
        try:
            attr = self.__get_sftp().stat(path=path)
        except (IOError, _prmk.SSHException) as e:
            self._record(f"FAILED: {e}")
            return None
        self._record("OK")
        return ListingEntry.from_attributes(
            attr, name=path.rstrip(_SEP).split(_SEP)[-1])


    def mkdir(self, path: str) -> bool:
        '''
        Creates a directory into the provided path.

        :param str path: The absolute path of the directory \
            that is to be created.
        '''
        self._begin('mkdir', path)
        try:
            self.__get_sftp().mkdir(path=path)
        except (IOError, _prmk.SSHException) as e:
            self._record(f"FAILED: {e}")
            return False
        self._record("OK")
        return True


    def delete(self, path: str) -> bool:
        '''
        Deletes the provided path. Directories are \
        deleted along with their contents.

        :param str path: An absolute path.
        '''
        self._begin('delete', path)
        try:
            self.__remove(self.__get_sftp(), path)
        except (IOError, _prmk.SSHException) as e:
            self._record(f"FAILED: {e}")
            return False
        self._record("OK")
        return True


    def rename(self, old_path: str, new_path: str) -> bool:
        '''
        Moves ``old_path`` to ``new_path``.

        :param str old_path: The absolute path of the item.
        :param str new_path: The item's new absolute path.
        '''
        self._begin('rename', old_path, new_path)
        try:
            self.__get_sftp().rename(oldpath=old_path, newpath=new_path)
        except (IOError, _prmk.SSHException) as e:
            self._record(f"FAILED: {e}")
            return False
        self._record("OK")
        return True


    def read(self, path: str) -> _Optional[bytes]:
        '''
        Returns the contents of the provided file, \
        or ``None`` on failure.

        :param str path: The absolute path of the file.
        '''
        self._begin('read', path)
        try:
            with self.__get_sftp().open(filename=path, mode='rb') as file:
                data = file.read()
        except (IOError, _prmk.SSHException) as e:
            self._record(f"FAILED: {e}")
            return None
        self._record(f"OK ({len(data)} bytes)")
        return data


    def write(self, path: str, data: bytes) -> bool:
        '''
        Writes ``data`` into the provided file, \
        replacing any previous contents.

        :param str path: The absolute path of the file.
        :param bytes data: The bytes that are to be written.
        '''
        self._begin('write', path)
        try:
            with self.__get_sftp().open(filename=path, mode='wb') as file:
                file.write(data)
                file.flush()
        except (IOError, _prmk.SSHException) as e:
            self._record(f"FAILED: {e}")
            return False
        self._record(f"OK ({len(data)} bytes)")
        return True


    def __get_sftp(self) -> _prmk.SFTPClient:
        '''
        Returns the ``SFTPClient`` instance, opening \
        the connection first if need be.
        '''
        if self.__sftp is None:
            self.open_connections()
        return self.__sftp


    def __remove(self, sftp: _prmk.SFTPClient, path: str) -> None:
        '''
        Removes the provided path, descending into \
        directories first.

        :param SFTPClient sftp: An ``SFTPClient`` instance.
        :param str path: An absolute path.
        '''
        if _is_dir(sftp.lstat(path=path).st_mode):
            for attr in sftp.listdir_attr(path=path):
                self.__remove(sftp, _join_paths(_SEP, path, attr.filename))
            sftp.rmdir(path=path)
            self._record(f"rmdir {path}")
        else:
            sftp.remove(path=path)
            self._record(f"remove {path}")
