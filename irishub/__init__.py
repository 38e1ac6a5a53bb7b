"""Guardian, mint and EVM fee modules on an in-memory ledger state."""

__version__ = "0.1.0"