

__all__ = [
    'Server'
]


import socket as _socket
from enum import Enum as _Enum
from typing import Optional as _Optional


from ._exceptions import EmptyServerInfosError as _ESIE
from ._exceptions import UnresolvedHostnameError as _UHE


class Server():
    '''
    This class describes a remote machine that is \
    reachable via the SFTP protocol, along with the \
    credentials used in authenticating with it.
    '''

    class KeyType(_Enum):
        '''
        This enum-class represents various types \
        of SSH keys.
        '''
        SSH_RSA = "ssh-rsa"
        SSH_ED25519 = "ssh-ed25519"
        ECDSA_SHA2_NISTP256 = "ecdsa-sha2-nistp256"
        ECDSA_SHA2_NISTP384 = "ecdsa-sha2-nistp384"
        ECDSA_SHA2_NISTP521 = "ecdsa-sha2-nistp521"


    @classmethod
    def from_password(
        cls,
        hostname: str,
        username: str,
        password: str,
        home: _Optional[str] = None,
        port: int = 22,
        public_key: _Optional[str] = None,
        key_type: _Optional[KeyType] = None,
        verify_host: bool = True
    ) -> 'Server':
        '''
        Returns a ``Server`` instance whose user \
        authenticates via password.

        :param str hostname: The remote machine's host name.
        :param str username: The name of the user you will \
            be logging in as.
        :param str password: The user's password.
        :param str | None home: The absolute path of the user's \
            home directory. If ``None``, then the remote working \
            directory of a freshly opened session is used. \
            Defaults to ``None``.
        :param int port: The port to which you will be connecting. \
            Defaults to ``22``.
        :param str | None public_key: The host's public SSH key. \
            Defaults to ``None``.
        :param KeyType | None key_type: The type of the host's \
            public SSH key. Defaults to ``None``.
        :param bool verify_host: Unless set to ``False``, a connection \
            can only be established if the host is known to the local \
            machine. Defaults to ``True``.
        '''
        server = cls()
        server.__home = home
        server.__credentials = {
            'hostname': hostname,
            'username': username,
            'password': password,
            'port': port,
            'public_key': public_key,
            'key_type': key_type if key_type is None else key_type.value,
            'verify_host': verify_host
        }
        return server


    @classmethod
    def from_key(
        cls,
        hostname: str,
        username: str,
        pkey: str,
        passphrase: _Optional[str] = None,
        home: _Optional[str] = None,
        port: int = 22,
        public_key: _Optional[str] = None,
        key_type: _Optional[KeyType] = None,
        verify_host: bool = True
    ) -> 'Server':
        '''
        Returns a ``Server`` instance whose user \
        authenticates via an SSH key.

        :param str hostname: The remote machine's host name.
        :param str username: The name of the user you will \
            be logging in as.
        :param str pkey: A path pointing to a file containing \
            your machine's private SSH key.
        :param str | None passphrase: A passphrase used for decrypting \
            the private key, only to be used in case it has been previously \
            encrypted. Defaults to ``None``.
        :param str | None home: The absolute path of the user's \
            home directory. If ``None``, then the remote working \
            directory of a freshly opened session is used. \
            Defaults to ``None``.
        :param int port: The port to which you will be connecting. \
            Defaults to ``22``.
        :param str | None public_key: The host's public SSH key. \
            Defaults to ``None``.
        :param KeyType | None key_type: The type of the host's \
            public SSH key. Defaults to ``None``.
        :param bool verify_host: Unless set to ``False``, a connection \
            can only be established if the host is known to the local \
            machine. Defaults to ``True``.
        '''
        server = cls()
        server.__home = home
        server.__credentials = {
            'hostname': hostname,
            'username': username,
            'pkey': pkey,
            'passphrase': passphrase,
            'port': port,
            'public_key': public_key,
            'key_type': key_type if key_type is None else key_type.value,
            'verify_host': verify_host
        }
        return server


    def get_credentials(self) -> dict[str, str]:
        '''
        Returns the provided credentials stored \
        within a dictionary.
        '''
        return dict(self.__credentials)


    def get_hostname(self) -> str:
        '''
        Returns the remote machine's host name.
        '''
        return self.__credentials['hostname']


    def get_port(self) -> int:
        '''
        Returns the port to which you will be connecting.
        '''
        return self.__credentials['port']


    def get_username(self) -> str:
        '''
        Returns the name of the user you will \
        be logging in as.
        '''
        return self.__credentials['username']


    def get_home(self) -> _Optional[str]:
        '''
        Returns the absolute path of the user's home \
        directory, or ``None`` if it was not provided.
        '''
        return self.__home


    def get_server_ip(self) -> str:
        '''
        Resolves the server's host name and returns \
        its IP address.

        :raises EmptyServerInfosError: No host name \
            has been provided.
        :raises UnresolvedHostnameError: The host name \
            could not be resolved.
        '''
        hostname = self.get_hostname()
        if not hostname:
            raise _ESIE()
        try:
            return _socket.gethostbyname(hostname)
        except _socket.gaierror as e:
            raise _UHE(hostname=hostname) from e


    def __str__(self) -> str:
        return f"{self.get_username()}@{self.get_hostname()}:{self.get_port()}"
