"""
Core utilities for FlexHub: security, request dependencies and errors.

Import from the submodules directly; services import `core.exceptions`
and `core.deps` imports services, so this package stays empty.
"""
