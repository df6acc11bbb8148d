import m2handler
import threading

from m2handler import cli
from m2handler.protocol import request as request_module


def test_arguments():

    args = cli.arguments(['--sender-id', 'echo', '--sub', 'tcp://127.0.0.1:9997',
                          '--pub', 'tcp://127.0.0.1:9996', '--force-json',
                          '--log-level', 'debug'])

    assert args.sender_id == 'echo'
    assert args.sub_address == 'tcp://127.0.0.1:9997'
    assert args.pub_address == 'tcp://127.0.0.1:9996'
    assert args.force_json == True
    assert args.log_level == 'debug'

    args = cli.arguments([])
    assert args.sender_id is None
    assert args.force_json == False


def test_missing_configuration(monkeypatch):

    for variable in m2handler.config.environment.values():
        monkeypatch.delenv(variable, raising=False)

    assert cli.main([]) == 2


def test_echo_end_to_end(mongrel2):

    connection = m2handler.connection('echo', mongrel2.sub_address, mongrel2.pub_address)
    handler = cli.EchoHandler(connection)
    handler.interval = 0.05

    thread = threading.Thread(target=handler.run, daemon=True)
    thread.start()

    def send():
        raw = request_module.encode('server', '9', '/echo', {'METHOD': 'GET'}, b'')
        mongrel2.push.send(raw)

    try:
        received = mongrel2.receive(send)
    finally:
        handler.stop()
        thread.join(5)
        connection.shutdown()

    assert received.startswith(b'server 1:9, HTTP/1.1 200 OK\r\n')
    assert b'path: /echo' in received


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
