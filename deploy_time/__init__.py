"""Find when a Solana program was first deployed."""

__version__ = "1.0.0"
