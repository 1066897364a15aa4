"""In-memory NFT collection with role-based minting and burning and scheduled media rotation."""

__version__ = "0.1.0"
__all__ = ["funcs", "models", "program"]