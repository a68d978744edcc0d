"""Domain layer for BINSTRING.

Holds the small value objects every other layer shares: the overloadable
primitive families, the capability record produced by detection, and the
sentinel used for omission-sensitive arguments.

Dependency rule: do not import from `binstring.adapters` or
`binstring.entrypoints`.
"""
