"""Command modules for taskledger."""
