"""Service layer for BINSTRING.

Capability detection, the scoped guards around ambient subsystem settings,
and the operation dispatcher that routes every call to a byte-exact path.

Dependency rule: may import `binstring.domain`, `binstring.interfaces` and
`binstring.config`, but not `binstring.adapters` or `binstring.entrypoints`.
"""
