"""Client toolkit for the invoice-swift backend."""

__version__ = "0.1.0"
