"""Lead lifecycle and conversation backend for creator brand partnerships."""

__version__ = "1.0.0"
