"""Entrypoints (inbound adapters) for BINSTRING.

Expose the library to the outside world. Currently this is the ``binstring``
command line tool, which parses inputs, builds a facade through
`binstring.bootstrap`, and presents results.

Dependency rule: may import `binstring.bootstrap` and `binstring.service_layer`;
avoid importing `binstring.adapters` directly.
"""
