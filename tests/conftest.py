import pytest

from bunyan_format.config import FormatConfig


@pytest.fixture
def base_record():
    return {
        "v": 0,
        "level": 30,
        "name": "svc",
        "hostname": "h1",
        "pid": 5,
        "time": "2021-01-02T03:04:05.000Z",
        "msg": "hello",
    }


@pytest.fixture
def short_config():
    return FormatConfig(output_mode="short", color=False)


@pytest.fixture
def long_config():
    return FormatConfig(output_mode="long", color=False)
