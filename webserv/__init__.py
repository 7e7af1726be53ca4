"""An event-driven HTTP server configured by an nginx-style file, answering through a CGI script."""

__version__ = "0.1.0"