import json

import pytest

from webserv.config import Config, ConfigError
from webserv.messages import ErrorMessages
from webserv.netutils import ipv4_to_nl
from webserv.tokenizer import Tokenizer
from webserv.tokens import Token, TokenType

T = TokenType

CONFIG_TEXT = """
server {
    listen 127.0.0.1:8080;
    server_name example.com;
    location /images {
        root ./www;
        index a.html b.html;
    }
}
"""


def _tokens(*pairs):
    return [Token(kind, value) for kind, value in pairs]


def _simple_server(*inner):
    return _tokens(
        (T.SERVER, "server"),
        (T.LBRACE, "{"),
        (T.DIRECTIVE, "listen"),
        (T.STRING, "127.0.0.1:8080"),
        (T.SEMICOLON, ";"),
        *inner,
        (T.RBRACE, "}"),
    )


def test_builds_server_block_from_tokenizer_output():
    config = Config(Tokenizer.from_text(CONFIG_TEXT).tokens)
    assert len(config.server_blocks) == 1
    block = config.server_blocks[0]
    assert block.directives["listen"] == ["127.0.0.1:8080"]
    assert block.directives["server_name"] == ["example.com"]
    assert block.ip == ipv4_to_nl("127.0.0.1")
    assert block.port == 8080


def test_location_directives_go_to_location():
    config = Config(Tokenizer.from_text(CONFIG_TEXT).tokens)
    block = config.server_blocks[0]
    location = block.search("/images/logo.png")
    assert location.prefix == "/images"
    assert location.directives["root"] == ["./www"]
    assert location.directives["index"] == ["a.html", "b.html"]
    assert "root" not in block.directives


def test_several_server_blocks_keep_order():
    tokens = _simple_server() + _tokens(
        (T.SERVER, "server"),
        (T.LBRACE, "{"),
        (T.DIRECTIVE, "listen"),
        (T.STRING, "10.0.0.1:9090"),
        (T.SEMICOLON, ";"),
        (T.RBRACE, "}"),
    )
    config = Config(tokens)
    assert [block.port for block in config.server_blocks] == [8080, 9090]
    assert config.server_blocks[1].ip == ipv4_to_nl("10.0.0.1")


def test_later_directive_overwrites_earlier():
    tokens = _simple_server(
        (T.DIRECTIVE, "root"),
        (T.STRING, "./a"),
        (T.SEMICOLON, ";"),
        (T.DIRECTIVE, "root"),
        (T.STRING, "./b"),
        (T.SEMICOLON, ";"),
    )
    config = Config(tokens)
    assert config.server_blocks[0].directives["root"] == ["./b"]


def test_bad_listen_address_raises():
    tokens = _tokens(
        (T.SERVER, "server"),
        (T.LBRACE, "{"),
        (T.DIRECTIVE, "listen"),
        (T.STRING, "not-an-address"),
        (T.SEMICOLON, ";"),
        (T.RBRACE, "}"),
    )
    with pytest.raises(ConfigError, match=ErrorMessages.E_BAD_IP):
        Config(tokens)


def test_directive_without_server_raises():
    tokens = _tokens((T.DIRECTIVE, "root"), (T.STRING, "./a"), (T.SEMICOLON, ";"))
    with pytest.raises(ConfigError):
        Config(tokens)


def test_directive_without_semicolon_raises():
    tokens = _tokens(
        (T.SERVER, "server"),
        (T.LBRACE, "{"),
        (T.DIRECTIVE, "root"),
        (T.STRING, "./a"),
    )
    with pytest.raises(ConfigError, match=ErrorMessages.E_BAD_ARG):
        Config(tokens)


def test_config_error_is_value_error():
    with pytest.raises(ValueError):
        Config(_tokens((T.LOCATION, "/x")))


def test_to_json_of_simple_server():
    config = Config(_simple_server())
    expected = (
        '"server" {\n'
        '\t"directives": {\n'
        '\t"listen": ["127.0.0.1:8080"]\n'
        "\t},\n"
        '\t"locations": {\n'
        "\n"
        "\t}\n"
        "}\n"
    )
    assert config.to_json(0) == expected


def test_to_json_separates_servers_with_commas():
    config = Config(_simple_server() + _simple_server())
    lines = config.to_json(0).splitlines()
    assert lines[0] == '"server" {'
    assert "}," in lines
    assert lines[-1] == "}"
    assert config.to_json(0).count('"server" ') == 2


def test_server_block_json_parses():
    config = Config(Tokenizer.from_text(CONFIG_TEXT).tokens)
    data = json.loads(config.server_blocks[0].to_json())
    assert data["directives"]["server_name"] == ["example.com"]
    assert data["locations"]["/images"]["directives"]["root"] == ["./www"]


def test_empty_token_stream_has_no_servers():
    config = Config([])
    assert config.server_blocks == ()
    assert config.to_json(0) == ""