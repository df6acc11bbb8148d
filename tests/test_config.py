import m2handler
import pytest

from m2handler.errors import ValidationError


@pytest.fixture
def clean_environment(monkeypatch):

    for variable in m2handler.config.environment.values():
        monkeypatch.delenv(variable, raising=False)

    return monkeypatch


def test_explicit(clean_environment):

    settings = m2handler.config.get('handler', 'tcp://127.0.0.1:9997', 'tcp://127.0.0.1:9996')
    assert settings.sender_id == 'handler'
    assert settings.sub_address == 'tcp://127.0.0.1:9997'
    assert settings.pub_address == 'tcp://127.0.0.1:9996'


def test_environment(clean_environment):

    clean_environment.setenv('M2_SENDER_ID', 'from-env')
    clean_environment.setenv('M2_SUB_ADDRESS', 'tcp://127.0.0.1:1')
    clean_environment.setenv('M2_PUB_ADDRESS', 'tcp://127.0.0.1:2')

    settings = m2handler.config.get()
    assert settings == ('from-env', 'tcp://127.0.0.1:1', 'tcp://127.0.0.1:2')

    # Explicit arguments take precedence.

    settings = m2handler.config.get(sender_id='explicit')
    assert settings.sender_id == 'explicit'
    assert settings.sub_address == 'tcp://127.0.0.1:1'


def test_missing(clean_environment):

    with pytest.raises(ValidationError):
        m2handler.config.get()

    with pytest.raises(ValidationError):
        m2handler.config.get('handler', 'tcp://127.0.0.1:9997')

    clean_environment.setenv('M2_PUB_ADDRESS', '')

    with pytest.raises(ValidationError):
        m2handler.config.get('handler', 'tcp://127.0.0.1:9997')

    with pytest.raises(ValidationError):
        m2handler.config.get('', 'tcp://127.0.0.1:9997', 'tcp://127.0.0.1:9996')


def test_connect(clean_environment, mongrel2):

    settings = m2handler.config.get('handler', mongrel2.sub_address, mongrel2.pub_address)
    connection = settings.connect()

    try:
        assert connection.sender_id == b'handler'
        assert connection.sub_address == mongrel2.sub_address
    finally:
        connection.shutdown()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
