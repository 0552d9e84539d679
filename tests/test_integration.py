"""End-to-end decoding of realistic directives."""

from dataclasses import dataclass

import pytest

from cfgdecode import (
    Args,
    Dispenser,
    Float32,
    Ref,
    TokenError,
    Uint8,
    decode,
    key,
    unmarshal_with_head,
)


@dataclass
class Proxy(Args):
    to: list[str] = key("to")
    timeout: Float32 = key("timeout")
    header: dict[str, str] = key("header")
    health_check: bool = key("health_check")
    retries: Uint8 = key("retries")


PROXY = """
# reverse proxy for the API
proxy /api {
    to backend1:8080 backend2:8080
    timeout 2.5
    header {
        X-Forwarded-Proto https
        X-Real-IP "{remote}"
    }
    health_check true
    retries 3
}
"""


def test_proxy_directive():
    dest = Ref(Proxy)
    head = unmarshal_with_head(Dispenser.from_text(PROXY, "Caddyfile"), dest)
    proxy = dest.value
    assert head.value == "proxy"
    assert head.line == 3
    assert proxy.arguments == ["/api"]
    assert proxy.to == ["backend1:8080", "backend2:8080"]
    assert proxy.timeout == 2.5
    assert proxy.header == {"X-Forwarded-Proto": "https", "X-Real-IP": "{remote}"}
    assert proxy.health_check is True
    assert proxy.retries == 3


def test_proxy_error_location():
    text = PROXY.replace("retries 3", "retries 300")
    with pytest.raises(TokenError) as exc:
        decode(Dispenser.from_text(text, "Caddyfile"), Proxy)
    assert str(exc.value) == 'Caddyfile:11: parsing "300": value out of range'


@dataclass
class Greeting:
    a: str = key("a")


def test_scenario_record_field():
    assert decode(Dispenser.from_text("root { a hello }"), Greeting) == Greeting(a="hello")


def test_scenario_int_sequence():
    assert decode(Dispenser.from_text("root 1 2 3"), list[int]) == [1, 2, 3]
    with pytest.raises(TokenError) as exc:
        decode(Dispenser.from_text("root 1 x 3"), list[int])
    assert exc.value.token.value == "x"


def test_scenario_mapping():
    assert decode(Dispenser.from_text("root { a 1\nb 2 }"), dict[str, int]) == {"a": 1, "b": 2}
    with pytest.raises(TokenError) as exc:
        decode(Dispenser.from_text("root { a 1\na 2 }"), dict[str, int])
    assert "already been taken at Testfile:1" in str(exc.value)
