"""zsh-bootstrap: provision zsh, Oh My Zsh and a CLI toolbelt on a Linux host.

Core design goals:
- Idempotent steps (re-running converges, nothing is duplicated)
- Declarative package/plugin manifests
- Mandatory vs. optional failures kept apart
- Centralized logging and a persisted run report
"""

__all__ = []
