"""Adapters (infrastructure) for BINSTRING.

Concrete primitive families (native bytes, multibyte, overloaded), the memory
mailer, and the process runtime that wires them to configuration.

Dependency rule: may import `binstring.interfaces`, `binstring.domain` and
`binstring.config`; the domain must not import this package.
"""
