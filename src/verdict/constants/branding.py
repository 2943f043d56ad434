"""CLI branding strings."""

from __future__ import annotations

CLI_DESCRIPTION: str = "Evaluate decision expressions in FEEL, JUEL-style templates, or script languages."
