"""A four-player card game: hand evaluation, accounts, a TCP server and client helpers."""

__version__ = "0.1.0"