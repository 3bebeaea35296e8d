"""
vm-bootstrap: prepare a fresh machine for an interactive coding session.

Detects the host package manager, installs Node.js, git and the CLI tool
when missing, clones the working repository into a fresh workspace and
hands the terminal over to the CLI.
"""

__version__ = "0.1.0"
