import re

import pytest

from webserv.tokenizer import Tokenizer, TokenizerError
from webserv.tokens import Token, TokenType

VALID = """server {
    listen 127.0.0.1:8080;
    server_name example.com;
    location /images {
        root ./www;
        method GET POST;
    }
}
"""


def _raises(text, message):
    with pytest.raises(TokenizerError, match=re.escape(message)):
        Tokenizer.from_text(text)


def test_tokenize_server_header():
    tokenizer = Tokenizer()
    tokenizer.tokenize("server {\n")
    assert tokenizer.tokens == [
        Token(TokenType.SERVER, "server"),
        Token(TokenType.LBRACE, "{"),
    ]


def test_tokenize_directive_splits_semicolon():
    tokenizer = Tokenizer()
    tokenizer.tokenize("listen 127.0.0.1:8080;\n")
    assert tokenizer.tokens == [
        Token(TokenType.STRING, "listen"),
        Token(TokenType.STRING, "127.0.0.1:8080"),
        Token(TokenType.SEMICOLON, ";"),
    ]


def test_tokenize_comment_ends_line():
    tokenizer = Tokenizer()
    tokenizer.tokenize("root /a; # root /b;\n")
    assert [t.value for t in tokenizer.tokens] == ["root", "/a", ";"]


def test_hash_inside_token_is_kept():
    tokenizer = Tokenizer()
    tokenizer.tokenize("index a#b;\n")
    assert tokenizer.tokens[1] == Token(TokenType.STRING, "a#b")


def test_carriage_return_is_not_whitespace():
    tokenizer = Tokenizer()
    tokenizer.tokenize("root x;\r\n")
    assert tokenizer.tokens[-1] == Token(TokenType.STRING, "\r")


def test_braces_split_without_spaces():
    tokenizer = Tokenizer()
    tokenizer.tokenize("location /a{}\n")
    assert [t.type for t in tokenizer.tokens] == [
        TokenType.LOCATION,
        TokenType.STRING,
        TokenType.LBRACE,
        TokenType.RBRACE,
    ]


def test_valid_config_marks_tokens():
    tokens = Tokenizer.from_text(VALID).tokens
    by_value = {t.value: t.type for t in tokens if t.type == TokenType.DIRECTIVE}
    assert set(by_value) == {"listen", "server_name", "root", "method"}
    location = next(t for t in tokens if t.type == TokenType.LOCATION)
    assert location.value == "/images"
    invalid = [t for t in tokens if t.type == TokenType.INVALID]
    assert [t.value for t in invalid] == ["/images"]


def test_valid_config_keeps_token_count():
    tokens = Tokenizer.from_text(VALID).tokens
    assert tokens[0].type == TokenType.SERVER
    assert tokens[-1].type == TokenType.RBRACE
    assert sum(t.type == TokenType.SEMICOLON for t in tokens) == 4


def test_empty_text_is_valid():
    assert Tokenizer.from_text("").tokens == []


def test_two_server_blocks():
    text = "server { listen 1.2.3.4:80; }\nserver { listen 1.2.3.4:81; }\n"
    tokens = Tokenizer.from_text(text).tokens
    assert sum(t.type == TokenType.SERVER for t in tokens) == 2
    assert sum(t.type == TokenType.DIRECTIVE for t in tokens) == 2


def test_from_file_matches_from_text(tmp_path):
    path = tmp_path / "site.config"
    path.write_text(VALID, encoding="utf-8")
    assert Tokenizer(path).tokens == Tokenizer.from_text(VALID).tokens


def test_missing_file(tmp_path):
    with pytest.raises(TokenizerError, match="could not open input file"):
        Tokenizer(tmp_path / "missing.config")


def test_double_semicolon():
    _raises("server { listen 1.2.3.4:80;; }", "Misuse of Semicolons!")


def test_semicolon_after_brace():
    _raises("server { ; listen 1.2.3.4:80; }", "Misuse of Semicolons!")


def test_unclosed_brace():
    _raises("server { listen 1.2.3.4:80;", "Misuse of Brackets!")


def test_stray_closing_brace():
    _raises("}", "Misuse of Brackets!")


def test_nesting_too_deep():
    _raises("server { location /a { { } } }", "Misuse of Brackets!")


def test_missing_listen():
    _raises("server {\n root /x;\n}\n", "no Listen directive")


def test_second_server_missing_listen():
    text = "server { listen 1.2.3.4:80; }\nserver { root /x; }\n"
    _raises(text, "no Listen directive")


def test_block_must_start_with_server():
    _raises("location /a { }", "must start with server Header!")


def test_server_without_brace():
    _raises("server listen 1.2.3.4:80;", "Wrong Token Order!")


def test_unknown_directive():
    _raises("server { listen 1.2.3.4:80; foo bar; }", "not a valid Directive!")


def test_listen_not_allowed_in_location():
    text = "server { listen 1.2.3.4:80; location /a { listen 1.2.3.4:81; } }"
    _raises(text, "not a valid Directive!")


def test_method_not_allowed_in_server():
    _raises("server { listen 1.2.3.4:80; method GET; }", "not a valid Directive!")


def test_location_with_two_paths():
    text = "server { listen 1.2.3.4:80; location /a /b { root /x; } }"
    _raises(text, "only be followed by One String!!")


def test_invalid_method():
    text = "server { listen 1.2.3.4:80; location /a { method GET PUT; } }"
    _raises(text, "allowed methods are GET, POST, and DELETE!")


def test_duplicate_method():
    text = "server { listen 1.2.3.4:80; location /a { method GET GET; } }"
    _raises(text, "doublure in the type of methods!")


def test_method_without_values():
    text = "server { listen 1.2.3.4:80; location /a { method ; } }"
    _raises(text, "must as least hold ONE STRING!")


def test_root_with_two_values():
    _raises("server { listen 1.2.3.4:80; root /a /b; }", "only hold ONE STRING!")


def test_cgi_params_needs_two_values():
    text = "server { listen 1.2.3.4:80; location /a { cgi_params x; } }"
    _raises(text, "only hold TWO STRINGS!")


def test_index_without_values():
    _raises("server { listen 1.2.3.4:80; index ; }", "must as least hold ONE STRING!")


def test_directive_value_must_be_string():
    _raises("server { listen server; }", "can only contain Strings!")


def test_error_is_value_error():
    with pytest.raises(ValueError):
        Tokenizer.from_text("}")