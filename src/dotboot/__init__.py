"""dotboot - bootstrap a machine from a dotfiles repository."""

__version__ = "0.1.0"
