"""Stockroom: inventory items and an audit ledger of stock takes."""
