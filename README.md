# webserv

webserv is a small event-driven HTTP server. It reads a configuration file
written in an nginx-like syntax and listens on every address the file
declares. For each request it finds the matching location and passes the
requested file to a CGI script. The script's output goes straight back to
the client.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running the server

```
webserv server.config
```

If you give no path, the server loads `configFile/searchTest.config`
relative to the current directory. The server runs until it receives an
interrupt (Ctrl-C). It exits with status 0 after a clean stop and with
status 1 on any failure. The failure is logged first, for example a syntax
error in the configuration or an address that cannot be bound.

If the environment variable `WEBSERV_CONF_FILE` names a file, the parsed
configuration is written there as JSON before serving starts.

## Configuration

A configuration holds one or more `server` blocks. A server block may hold
`location` blocks. Directives end with a semicolon. A token that starts with
`#` ends the line, so the rest of that line is a comment.

```
server {
    listen 127.0.0.1:8080;
    server_name example.com;
    root ./www;

    location / {
        root ./www;
        method GET;
    }

    location /contents {
        root ./contents;
        method GET POST;
    }
}
```

The parser enforces these rules and raises `TokenizerError` with a message
that names the problem:

- Braces must balance and nest at most two levels deep (server, then
  location). A semicolon may not follow another semicolon or a brace, and a
  `{` may not follow a semicolon.
- Every server block needs a `listen` directive. Its value must be
  `a.b.c.d:port`, with each octet at most 255 and the port at most 65535.
  An invalid value raises `ConfigError` when the blocks are built.
- Server blocks accept `listen`, `host`, `port`, `server_name`,
  `error_page`, `client_max_body_size`, `return`, `root`, `index` and
  `autoindex`.
- Location blocks accept `error_page`, `client_max_body_size`, `method`,
  `return`, `root`, `index`, `autoindex`, `cgi_pass` and `cgi_params`.
- `listen`, `host`, `port`, `client_max_body_size`, `root`, `autoindex` and
  `cgi_pass` take exactly one value. `cgi_params` takes exactly two. Every
  other directive takes at least one.
- `method` accepts only `GET`, `POST` and `DELETE`, each at most once.
- A `location` is followed by exactly one path, then `{`.

## How a request is answered

1. The request is read in chunks of up to 1000 bytes. Reading stops at a
   short chunk, or at a full chunk once the blank line that ends the head
   has arrived. Header names are lower-cased, and a request for `/` becomes
   `/index.html`.
2. A server block is chosen by the address of the listening socket. The
   first block with that address is the default. A block whose
   `server_name` matches the `Host` header (without its port) wins over it.
3. The location with the longest prefix of the request path is chosen. Its
   last `root` value is joined with the rest of the path after the prefix.
   `/index.html` always maps to `./index.html`.
4. The server then acts on the result:
   - If the file exists and the method is `GET`, it starts
     `./cgi-bin/GET.cgi`. The script gets the file path as its argument
     name and in `QUERY_STRING`, and its standard output is the client
     socket.
   - If the file does not exist, the client receives a fixed
     `HTTP/1.0 501 Not Implemented` reply.
   - In every case the connection is then closed.

## What it does not do

- It serves nothing by itself. Files are only ever handed to the CGI
  script, and the package ships no such script.
- A request with no matching location, a location with no `root`, or an
  existing file requested with a method other than `GET` gets no reply. The
  connection is simply closed.
- `error_page`, `client_max_body_size`, `return`, `index`, `autoindex`,
  `cgi_pass`, `cgi_params` and `method` are checked and stored, but they do
  not change how a request is answered.
- Request bodies are not handled. There is no keep-alive, and each
  connection carries one request.

## Using the pieces as a library

- `webserv.tokenizer`: `Tokenizer(path)` and `Tokenizer.from_text(text)`
  produce validated tokens in `.tokens`. Errors raise `TokenizerError`.
- `webserv.config`: `Config(tokens)` builds `server_blocks`. Its
  `to_json(indent_level)` renders them, and errors raise `ConfigError`.
- `webserv.server_block`, `webserv.directives` and `webserv.trie`:
  - `ServerBlock`, with `set_ip_port`, `ip` and `port`.
  - `DirectiveBlock`, with `add_directive` and a read-only `directives`
    mapping.
  - `LocationBlock`, with `prefix`.
  - `Trie`, with `insert` and longest-prefix `search`.
- `webserv.searcher`: `Searcher(config)` offers `addresses`,
  `get_location_prefix`, `find_server_directive` and
  `find_location_directive`. Each takes a bound socket or an `(ip, port)`
  pair as its address.
- `webserv.request`, `webserv.response`, `webserv.events`,
  `webserv.connection` and `webserv.listener`: `Request`, `Response`,
  `EventManager`, `ConnectionManager`, `Connection` and `Listener`.
  `Listener.run()` loops until `webserv.netutils.shutdown_event()` is set.
- `webserv.netutils`: `ipv4_to_nl` and `nl_to_ipv4` convert between dotted
  IPv4 text and network-order integers.
- `webserv.logger`: `get_logger()` returns the shared `Logger`, which
  prints timestamped records at `INFO` and above. Call `set_log_file` to
  also append them to a file.
- `webserv.random_tokens`: `RandomTokenList(seed)` generates random,
  well-formed token streams and can render them with `to_json`.