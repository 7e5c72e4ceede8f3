from typing import Any as _Any


class InvalidPathError(Exception):
    '''
    This exception is thrown whenever a path \
    would resolve outside of an item's chroot \
    directory.

    :param str path: The rejected path or name.
    '''

    def __init__(self, path: str):
        '''
        This exception is thrown whenever a path \
        would resolve outside of an item's chroot \
        directory.

        :param str path: The rejected path or name.
        '''
        self.path = path
        msg = f'Path "{path}" resolves outside of the chroot directory.'
        super().__init__(msg)


class UnreachableItemError(Exception):
    '''
    This exception is thrown whenever the transport \
    reports a failure while operating on a remote item.

    :param Any item: The item on which the failed \
        operation was attempted.
    '''

    def __init__(self, item: _Any):
        '''
        This exception is thrown whenever the transport \
        reports a failure while operating on a remote item.

        :param Any item: The item on which the failed \
            operation was attempted.
        '''
        self.item = item
        msg = f'Item "{item.get_full_path()}" is unreachable.'
        super().__init__(msg)


class UnknownKeyTypeError(Exception):
    '''
    This exception is thrown whenever the user provides \
    an unknown public key type.

    :param str key_type: The type of the key that was provided.
    '''

    def __init__(self, key_type: str):
        '''
        This exception is thrown whenever the user provides \
        an unknown public key type.

        :param str key_type: The type of the key that was provided.
        '''
        msg = f'Key type "{key_type}" is not supported.'
        super().__init__(msg)


class EmptyServerInfosError(Exception):
    '''
    This exception is thrown whenever a server's IP \
    is requested though no hostname has been provided.
    '''

    def __init__(self):
        super().__init__('No hostname has been provided for this server.')


class UnresolvedHostnameError(Exception):
    '''
    This exception is thrown whenever a server's \
    hostname cannot be resolved into an IP address.

    :param str hostname: The hostname that could \
        not be resolved.
    '''

    def __init__(self, hostname: str):
        '''
        This exception is thrown whenever a server's \
        hostname cannot be resolved into an IP address.

        :param str hostname: The hostname that could \
            not be resolved.
        '''
        self.hostname = hostname
        msg = f'Hostname "{hostname}" could not be resolved.'
        super().__init__(msg)
