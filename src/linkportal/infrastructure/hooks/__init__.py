"""Infrastructure hooks module.

Contains built-in hooks and hook registration utilities.
"""

from linkportal.infrastructure.hooks.builtin_hooks import (
    BUILTIN_HOOKS,
    register_builtin_hooks,
    unlink_audit_hook,
)

__all__ = [
    "BUILTIN_HOOKS",
    "register_builtin_hooks",
    "unlink_audit_hook",
]
