from rawnet.http import HttpRequest, get_request


def test_get_request_bytes():
    request = get_request("/", "localhost:8080")
    assert request.to_bytes() == (
        b"GET / HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"User-Agent: curl/7.68.0\r\n"
        b"Accept: */*\r\n"
        b"Connection: close\r\n"
        b"\r\n"
    )


def test_get_request_fields():
    request = get_request("/index.html", "127.0.0.1:8443")
    assert request.request_line == "GET /index.html HTTP/1.1"
    assert request.headers[0] == "Host: 127.0.0.1:8443"


def test_request_ends_with_blank_line():
    assert get_request("/", "example.com").to_bytes().endswith(b"\r\n\r\n")


def test_body_follows_blank_line():
    request = HttpRequest("POST / HTTP/1.1", ("Host: example.com",), b"hello")
    assert request.to_bytes() == b"POST / HTTP/1.1\r\nHost: example.com\r\n\r\nhello"