import logging
import unittest
from unittest.mock import Mock, patch


from sftpchroot.server import Server
from sftpchroot.connection import Connection
from sftpchroot._handlers import SFTPHandler


def build_server(home=None) -> Server:
    return Server.from_password(
        hostname="HOST",
        username="USERNAME",
        password="PASSWORD",
        home=home)


def build_handler(is_open: bool = False) -> Mock:
    '''
    Returns a mock transport handler.
    '''
    handler = Mock()
    handler.is_open.return_value = is_open
    handler.get_home.return_value = "/home/remote"
    return handler


class TestConnection(unittest.TestCase):

    def test_constructor_on_defaults(self):
        conn = Connection(server=build_server())
        self.assertIsInstance(conn.get_transport(), SFTPHandler)
        self.assertIs(conn.get_logger(), logging.getLogger('sftpchroot'))

    def test_constructor_on_custom_logger(self):
        logger = logging.getLogger('custom')
        conn = Connection(server=build_server(), handler=build_handler(), logger=logger)
        self.assertIs(conn.get_logger(), logger)

    def test_get_server(self):
        server = build_server()
        self.assertIs(Connection(server=server, handler=build_handler()).get_server(), server)

    def test_get_home_from_server(self):
        handler = build_handler()
        conn = Connection(server=build_server(home="/srv/user"), handler=handler)
        self.assertEqual(conn.get_home(), "/srv/user")
        handler.get_home.assert_not_called()

    def test_get_home_from_transport(self):
        handler = build_handler()
        conn = Connection(server=build_server(), handler=handler)
        self.assertEqual(conn.get_home(), "/home/remote")
        self.assertEqual(conn.get_home(), "/home/remote")
        handler.get_home.assert_called_once()

    def test_open(self):
        handler = build_handler()
        Connection(server=build_server(), handler=handler).open()
        handler.open_connections.assert_called_once()

    def test_close(self):
        handler = build_handler()
        Connection(server=build_server(), handler=handler).close()
        handler.close_connections.assert_called_once()

    def test_is_open(self):
        conn = Connection(server=build_server(), handler=build_handler(is_open=True))
        self.assertTrue(conn.is_open())
        conn.get_transport().is_open.return_value = False
        self.assertFalse(conn.is_open())

    def test_context_manager(self):
        handler = build_handler()
        with Connection(server=build_server(), handler=handler) as conn:
            self.assertIsInstance(conn, Connection)
            handler.open_connections.assert_called_once()
            handler.close_connections.assert_not_called()
        handler.close_connections.assert_called_once()

    def test_del_on_open_connection(self):
        handler = build_handler(is_open=True)
        conn = Connection(server=build_server(), handler=handler)
        with self.assertWarns(ResourceWarning):
            conn.__del__()
        handler.close_connections.assert_called_once()
        handler.is_open.return_value = False

    @patch('warnings.warn')
    def test_del_on_closed_connection(self, warn):
        handler = build_handler()
        conn = Connection(server=build_server(), handler=handler)
        conn.__del__()
        warn.assert_not_called()
        handler.close_connections.assert_not_called()


if __name__=="__main__":
    unittest.main()
