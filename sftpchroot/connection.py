

__all__ = [
    'Connection'
]


import logging as _logging
import warnings as _warn
from typing import Optional as _Optional


from .server import Server as _Server
from ._handlers import TransportHandler as _TransportHandler
from ._handlers import SFTPHandler as _SFTPHandler


class Connection():
    '''
    This class bundles everything an item needs \
    in order to reach a remote machine: its server \
    descriptor, a transport handler and a logger.

    :param Server server: A ``Server`` instance describing \
        the remote machine and its credentials.
    :param TransportHandler | None handler: The transport \
        handler through which all remote calls are issued. \
        If ``None``, then an ``SFTPHandler`` is created for \
        the provided server. Defaults to ``None``.
    :param Logger | None logger: The logger to which every \
        operation's outcome is reported. If ``None``, then \
        the ``sftpchroot`` logger is used. Defaults to ``None``.

    :note: A connection's underlying session is not safe \
        for concurrent use.
    '''

    def __init__(
        self,
        server: _Server,
        handler: _Optional[_TransportHandler] = None,
        logger: _Optional[_logging.Logger] = None
    ):
        '''
        This class bundles everything an item needs \
        in order to reach a remote machine: its server \
        descriptor, a transport handler and a logger.

        :param Server server: A ``Server`` instance describing \
            the remote machine and its credentials.
        :param TransportHandler | None handler: The transport \
            handler through which all remote calls are issued. \
            If ``None``, then an ``SFTPHandler`` is created for \
            the provided server. Defaults to ``None``.
        :param Logger | None logger: The logger to which every \
            operation's outcome is reported. If ``None``, then \
            the ``sftpchroot`` logger is used. Defaults to ``None``.
        '''
        self.__server = server
        self.__handler = handler if handler is not None \
            else _SFTPHandler(server=server)
        self.__logger = logger if logger is not None \
            else _logging.getLogger('sftpchroot')
        self.__home = None


    def get_server(self) -> _Server:
        '''
        Returns the connection's server descriptor.
        '''
        return self.__server


    def get_transport(self) -> _TransportHandler:
        '''
        Returns the connection's transport handler.
        '''
        return self.__handler


    def get_logger(self) -> _logging.Logger:
        '''
        Returns the connection's logger.
        '''
        return self.__logger


    def get_home(self) -> str:
        '''
        Returns the absolute path of the user's home \
        directory. Unless provided by the server descriptor, \
        it is fetched once from the transport.
        '''
        if (home := self.__server.get_home()):
            return home
        if self.__home is None:
            self.__home = self.__handler.get_home()
        return self.__home


    def is_open(self) -> bool:
        '''
        Returns ``True`` if the underlying session \
        is open, else returns ``False``.
        '''
        return self.__handler.is_open()


    def open(self) -> None:
        '''
        Opens all necessary connections.
        '''
        self.__handler.open_connections()


    def close(self) -> None:
        '''
        Closes all open connections.
        '''
        self.__handler.close_connections()


    def __enter__(self) -> 'Connection':
        '''
        Enter the runtime context related to this instance.
        '''
        self.open()
        return self


    def __exit__(self, exc_type, exc_value, traceback) -> None:
        '''
        Exit the runtime context related to this object.
        '''
        self.close()


    def __del__(self) -> None:
        '''
        The class destructor method.
        '''
        handler = getattr(self, '_Connection__handler', None)
        if handler is not None and handler.is_open():
            msg = f'You might want to consider instantiating class "{self.__class__.__name__}"'
            msg += " through the use of a context manager by utilizing Python's"
            msg += ' "with" statement, or by simply invoking an instance\'s'
            msg += ' "close" method after being done using it.'
            _warn.warn(msg, ResourceWarning)
            self.close()
